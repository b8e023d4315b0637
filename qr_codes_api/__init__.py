"""QR codes API package."""
