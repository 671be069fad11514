"""
Back-office services.

    domain/      - restaurants, team, tables, POS, payments
    onboarding/  - the onboarding wizard state machine
    pos_urls     - POS base URL derivation
    qr           - QR code rendering
"""
