"""Import defaults shared by every feed."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_flag, env_str

DEFAULT_DATA_DELIMITER = "|"


@dataclass(frozen=True, slots=True)
class ImportConfig:
    """Process-wide import settings; feeds may override the first two."""

    compare_content: bool = True
    data_delimiter: str = DEFAULT_DATA_DELIMITER
    current_site_handle: str | None = None


def get_import_config() -> ImportConfig:
    return ImportConfig(
        compare_content=env_flag("TAXOFEED_COMPARE_CONTENT", default=True),
        data_delimiter=env_str("TAXOFEED_DATA_DELIMITER") or DEFAULT_DATA_DELIMITER,
        current_site_handle=env_str("TAXOFEED_CURRENT_SITE"),
    )
