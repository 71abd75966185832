"""Settings tests."""

import pytest
from pydantic import ValidationError

from roombnb.config import Settings

CLOUDINARY = {
    "cloudinary_cloud_name": "demo",
    "cloudinary_api_key": "key",
    "cloudinary_api_secret": "secret",
}


def test_postgres_scheme_is_rewritten():
    settings = Settings(_env_file=None, database_url="postgres://u:p@db.internal:5432/roombnb")
    assert settings.database_url == "postgresql://u:p@db.internal:5432/roombnb"


def test_image_host_configured_needs_every_credential():
    assert Settings(_env_file=None, **CLOUDINARY).image_host_configured
    partial = {**CLOUDINARY, "cloudinary_api_secret": None}
    assert not Settings(_env_file=None, **partial).image_host_configured


def test_production_rejects_localhost_database():
    with pytest.raises(ValidationError):
        Settings(
            _env_file=None,
            environment="production",
            database_url="postgresql://u:p@localhost:5432/roombnb",
            **CLOUDINARY,
        )


def test_production_requires_image_host():
    with pytest.raises(ValidationError):
        Settings(
            _env_file=None,
            environment="production",
            database_url="postgresql://u:p@db.internal:5432/roombnb",
            cloudinary_cloud_name=None,
            cloudinary_api_key=None,
            cloudinary_api_secret=None,
        )


def test_production_settings_accepted():
    settings = Settings(
        _env_file=None,
        environment="production",
        database_url="postgresql://u:p@db.internal:5432/roombnb",
        **CLOUDINARY,
    )
    assert settings.environment == "production"
