"""
Drive family grouping.

Drive variants differ only by a multiplier tier encoded in the last two
characters of their identifier ("x1", "x5", ...). Variants sharing the
remaining prefix form a drive family and are evaluated against the same
power plant.
"""

from __future__ import annotations

from typing import Dict, Iterable, List

from .components import DataIntegrityError, Drive

# Characters at the end of a drive identifier that encode the multiplier tier
MULTIPLIER_SUFFIX_LENGTH = 2


def family_key(data_name: str) -> str:
    """
    Get the drive family key for a drive identifier.

    Args:
        data_name: Raw drive identifier (e.g. "TungstenResistojetx4").

    Returns:
        The identifier with its multiplier suffix removed.

    Raises:
        DataIntegrityError: If the identifier is too short to carry a suffix.
    """
    if len(data_name) <= MULTIPLIER_SUFFIX_LENGTH:
        raise DataIntegrityError(
            f"Drive identifier {data_name!r} is too short to strip a multiplier suffix"
        )
    return data_name[:-MULTIPLIER_SUFFIX_LENGTH]


def group_drive_families(drives: Iterable[Drive]) -> Dict[str, List[Drive]]:
    """
    Group drive variants by family key.

    Families appear in order of their first variant, and variants keep
    their catalog order within a family.
    """
    families: Dict[str, List[Drive]] = {}
    for drive in drives:
        families.setdefault(family_key(drive.data_name), []).append(drive)
    return families
