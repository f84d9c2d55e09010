from fastapi import HTTPException, status

from app.core.config import MAX_SUPPORTED_YEAR, MIN_SUPPORTED_YEAR


def validate_year(year: int) -> int:
    """
    Ensure year is a Gregorian year the holiday rules can compute.

    Returns year if valid, otherwise raises 400.
    """
    if not MIN_SUPPORTED_YEAR <= year <= MAX_SUPPORTED_YEAR:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Year must be between {MIN_SUPPORTED_YEAR} and {MAX_SUPPORTED_YEAR}",
        )
    return year


def normalize_client_name(client_name: str | None) -> str | None:
    """Trim a client name from a request; blank means no client."""
    if client_name is None:
        return None
    client_name = client_name.strip()
    return client_name or None
