# ------------------------------
# Services's utils
# ------------------------------

from typing import Optional

from services.constants import MASKED_CREDENTIAL_VISIBLE_CHARS


def status_category(status_code: int) -> str:
    '''
      Map an HTTP status code to its category name.
    '''
    if 100 <= status_code < 200:
        return "Information"
    if 200 <= status_code < 300:
        return "Success"
    if 300 <= status_code < 400:
        return "Redirection"
    if 400 <= status_code < 500:
        return "Client error"
    if 500 <= status_code < 600:
        return "Server error"
    return "Unknown"


def mask_credential(credential: Optional[str], visible: int = MASKED_CREDENTIAL_VISIBLE_CHARS) -> str:
    '''
      Mask an API key for display, keeping only its last few characters.
      Short keys are masked entirely.
    '''
    if not credential:
        return ""
    if len(credential) <= visible * 2:
        return "*" * len(credential)
    return "*" * (len(credential) - visible) + credential[-visible:]


def truncate(text: str, limit: int = 200) -> str:
    '''
      Shorten text for log lines.
    '''
    if text is None:
        return ""
    return text if len(text) <= limit else f"{text[:limit]}..."
