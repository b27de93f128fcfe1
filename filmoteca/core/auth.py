# filmoteca/core/auth.py

from typing import Dict, Optional


def get_auth_headers(token: Optional[str]) -> Dict[str, str]:
    """
    Headers for every TMDb request: JSON accept plus the Bearer token.
    An empty token yields the accept header only.
    """
    headers = {"accept": "application/json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers
