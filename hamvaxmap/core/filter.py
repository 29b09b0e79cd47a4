"""Selection of fully geocoded records."""

from hamvaxmap.core.models import AddressRecord


def select_resolved(records: list[AddressRecord]) -> list[AddressRecord]:
    """Keep records that have both coordinates, in their original order."""
    return [record for record in records if record.is_resolved]
