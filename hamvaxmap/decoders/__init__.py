"""Row decoders, one per known source table layout."""

from hamvaxmap.decoders.base import BaseRowDecoder
from hamvaxmap.decoders.kvhh import KvhhRowDecoder

# Map decoder names (as used in sources.yaml) to decoder classes
DECODER_MAP: dict[str, type[BaseRowDecoder]] = {
    "kvhh": KvhhRowDecoder,
}


def get_decoder(name: str) -> BaseRowDecoder:
    """Instantiate the decoder registered under ``name``."""
    try:
        decoder_class = DECODER_MAP[name]
    except KeyError:
        raise ValueError(
            f"No row decoder named {name!r}; known decoders: {sorted(DECODER_MAP)}"
        ) from None
    return decoder_class()


__all__ = ["BaseRowDecoder", "KvhhRowDecoder", "DECODER_MAP", "get_decoder"]
