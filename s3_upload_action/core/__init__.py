"""
Core upload logic.

Nothing in here imports boto3, qrcode or the Actions runner conventions.
Those live in infrastructure and are handed in through small protocols.
"""
