"""Security: JWT verification."""
