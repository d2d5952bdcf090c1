import hashlib
from urllib.parse import urlencode


def gravatar_url(email: str, base_url: str, size: int = 200, rating: str = "pg", default: str = "mm") -> str:
    """Avatar URL derived from the email, as gravatar.com expects it."""
    digest = hashlib.md5(email.strip().lower().encode("utf-8")).hexdigest()
    query = urlencode({"s": size, "r": rating, "d": default})
    return f"{base_url.rstrip('/')}/{digest}?{query}"
