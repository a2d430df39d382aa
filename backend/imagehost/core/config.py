from functools import lru_cache

from pydantic import AliasChoices, Field, HttpUrl, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from imagehost.core.errors import ConfigurationError


def varenv(*varnames: str):
    return Field(default=..., min_length=1, validation_alias=AliasChoices(*varnames))


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    s3_endpoint: HttpUrl = Field(
        default=...,
        validation_alias=AliasChoices("S3_ENDPOINT_URL", "MINIO_URL"),
    )
    s3_bucket: str = varenv("S3_BUCKET", "MINIO_BUCKET")
    s3_access_key: str = varenv("S3_ACCESS_KEY", "MINIO_ACCESS_KEY")
    s3_secret_key: str = varenv("S3_SECRET_KEY", "MINIO_SECRET_KEY")
    s3_region: str = Field(default="us-east-1", alias="S3_REGION")
    s3_timeout_seconds: float = Field(default=10.0, gt=0, alias="S3_TIMEOUT_SECONDS")
    s3_max_attempts: int = Field(default=1, ge=1, alias="S3_MAX_ATTEMPTS")

    sniff_content: bool = Field(default=True, alias="UPLOAD_SNIFF_CONTENT")


def _env_names() -> dict[str, str]:
    names: dict[str, str] = {}
    for field_name, field in Settings.model_fields.items():
        alias = field.validation_alias or field.alias
        if isinstance(alias, AliasChoices):
            choices = [str(choice) for choice in alias.choices]
        else:
            choices = [alias or field_name.upper()]
        for choice in choices:
            names[choice.lower()] = choices[0]
        names[field_name] = choices[0]
    return names


def load_settings() -> Settings:
    """Read settings from the environment, failing fast on missing values.

    The raised error names the offending variables, never their values.
    """
    try:
        return Settings()  # type: ignore[call-arg]
    except ValidationError as exc:
        names = _env_names()
        invalid = sorted(
            {
                names.get(str(error["loc"][0]).lower(), str(error["loc"][0]))
                for error in exc.errors()
                if error["loc"]
            }
        )
        raise ConfigurationError(
            "Missing or invalid configuration: " + ", ".join(invalid)
        ) from None


@lru_cache
def get_settings() -> Settings:
    return load_settings()
