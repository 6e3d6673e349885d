import re


def normalize_text(text: str) -> str:
    """
    Normalize text for comparison.

    Args:
        text: Text to normalize

    Returns:
        Normalized lowercase text
    """
    text = (text or '').lower().strip()
    text = re.sub(r'\s+', ' ', text)
    text = re.sub(r'[^\w\s-]', '', text)
    return text


def normalize_contact(contact: str) -> str:
    """Digits only, so '0917 123 4567' and '09171234567' compare equal."""
    return re.sub(r'\D', '', contact or '')
