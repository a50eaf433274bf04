# vpkpack/src/vpkpack/core/config.py

from typing import Optional

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from vpkpack.core.settings import DEFAULT_OUTPUT_FILE


class Settings(BaseSettings):
    default_output_file: str = Field(default=DEFAULT_OUTPUT_FILE)

    log_level: str = Field(default="INFO")
    log_format: str = Field(default="%(levelname)s %(name)s - %(message)s")

    # Bytes read from a source file per write into the archive
    copy_chunk_size: int = Field(default=1024 * 1024, gt=0)

    # Reproducible builds: fixed entry timestamps when set
    source_date_epoch: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices("SOURCE_DATE_EPOCH", "VPKPACK_SOURCE_DATE_EPOCH"),
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="VPKPACK_",
        extra="ignore",
        populate_by_name=True,
    )


# Instantiate settings
settings = Settings()
