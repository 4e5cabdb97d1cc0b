"""Email masking for client-facing and logged addresses."""

MASK_CHAR = "*"
VISIBLE_LOCAL_CHARS = 3


def mask_email(email: str) -> str:
    """Hide most of the local part of an email address.

    Reveals at most the first three characters of the local part, replaces
    the rest with ``*`` and keeps the domain intact. A local part of one
    character is returned unmasked.

    Args:
        email: Address to mask.

    Returns:
        Masked address. A value without ``@`` is masked completely.

    Example:
        >>> mask_email("alice@example.com")
        'ali**@example.com'
        >>> mask_email("a@example.com")
        'a@example.com'
    """
    if "@" not in email:
        return MASK_CHAR * len(email)

    local, domain = email.rsplit("@", 1)
    if len(local) <= 1:
        return email

    visible = local[:VISIBLE_LOCAL_CHARS]
    hidden = max(len(local) - VISIBLE_LOCAL_CHARS, 0)
    return f"{visible}{MASK_CHAR * hidden}@{domain}"
