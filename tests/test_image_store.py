"""Tests for the image host adapter."""

import cloudinary.exceptions
import cloudinary.uploader
import pytest

from roombnb.services.image_store import ImageStore, ImageStoreError, discard_images


@pytest.fixture
def store():
    return ImageStore(
        cloud_name="demo",
        api_key="key123",
        api_secret="secret456",
        timeout=5.0,
    )


@pytest.fixture
def uploads(monkeypatch):
    """Record calls to the SDK upload and answer with a canned response."""
    calls = []
    response = {
        "secure_url": "https://res.example.com/airbnb/rooms/7/abc.jpg",
        "public_id": "airbnb/rooms/7/abc",
    }

    def fake_upload(file, **options):
        calls.append({"name": file.name, "content": file.read(), "options": options})
        return response

    monkeypatch.setattr(cloudinary.uploader, "upload", fake_upload)
    return calls, response


@pytest.fixture
def destroys(monkeypatch):
    """Record calls to the SDK destroy; results are looked up by public id."""
    calls = []
    results = {}

    def fake_destroy(public_id, **options):
        calls.append({"public_id": public_id, "options": options})
        outcome = results.get(public_id, "ok")
        if isinstance(outcome, Exception):
            raise outcome
        return {"result": outcome}

    monkeypatch.setattr(cloudinary.uploader, "destroy", fake_destroy)
    return calls, results


def test_folder_is_below_root():
    store = ImageStore("demo", "key", "secret", root_folder="/airbnb/")
    assert store.folder("rooms", 3) == "airbnb/rooms/3"


def test_configured_requires_all_credentials():
    assert ImageStore("demo", "key", "secret").configured
    assert not ImageStore("demo", "key", None).configured


class TestUpload:
    """Tests for ImageStore.upload."""

    @pytest.mark.asyncio
    async def test_upload_into_folder(self, store, uploads):
        calls, _ = uploads

        uploaded = await store.upload(b"jpeg-bytes", "room.jpg", folder="airbnb/rooms/7")

        assert uploaded.url == "https://res.example.com/airbnb/rooms/7/abc.jpg"
        assert uploaded.asset_id == "airbnb/rooms/7/abc"
        assert uploaded.as_photo() == {
            "url": "https://res.example.com/airbnb/rooms/7/abc.jpg",
            "picture_id": "airbnb/rooms/7/abc",
        }
        assert len(calls) == 1
        assert calls[0]["name"] == "room.jpg"
        assert calls[0]["content"] == b"jpeg-bytes"
        options = calls[0]["options"]
        assert options["folder"] == "airbnb/rooms/7"
        assert options["cloud_name"] == "demo"
        assert options["api_key"] == "key123"
        assert options["api_secret"] == "secret456"
        assert options["timeout"] == 5.0
        assert "public_id" not in options

    @pytest.mark.asyncio
    async def test_upload_overwrites_existing_asset(self, store, uploads):
        calls, response = uploads
        response.update(public_id="airbnb/users/1/a", secure_url="https://res.example.com/a.jpg")

        uploaded = await store.upload(
            b"new", "me.png", folder="airbnb/users/1", asset_id="airbnb/users/1/a"
        )

        assert uploaded.asset_id == "airbnb/users/1/a"
        options = calls[0]["options"]
        assert options["public_id"] == "airbnb/users/1/a"
        assert options["overwrite"] is True
        assert options["invalidate"] is True
        assert "folder" not in options

    @pytest.mark.asyncio
    async def test_upload_sdk_error_raises(self, store, monkeypatch):
        def failing_upload(file, **options):
            raise cloudinary.exceptions.AuthorizationRequired("Invalid api_key")

        monkeypatch.setattr(cloudinary.uploader, "upload", failing_upload)

        with pytest.raises(ImageStoreError):
            await store.upload(b"x", "x.jpg", folder="airbnb/rooms/1")

    @pytest.mark.asyncio
    async def test_upload_unexpected_response_raises(self, store, uploads):
        _, response = uploads
        response.clear()
        response["result"] = "ok"

        with pytest.raises(ImageStoreError):
            await store.upload(b"x", "x.jpg", folder="airbnb/rooms/1")

    @pytest.mark.asyncio
    async def test_unconfigured_store_raises_without_calling_host(self, uploads):
        calls, _ = uploads
        store = ImageStore(cloud_name=None, api_key=None, api_secret=None)

        with pytest.raises(ImageStoreError):
            await store.upload(b"x", "x.jpg", folder="airbnb/rooms/1")
        assert calls == []


class TestDelete:
    """Tests for ImageStore.delete."""

    @pytest.mark.asyncio
    async def test_delete_passes_credentials(self, store, destroys):
        calls, _ = destroys

        await store.delete("airbnb/rooms/7/abc")

        assert calls[0]["public_id"] == "airbnb/rooms/7/abc"
        assert calls[0]["options"]["api_key"] == "key123"
        assert calls[0]["options"]["invalidate"] is True

    @pytest.mark.asyncio
    async def test_delete_missing_asset_succeeds(self, store, destroys):
        _, results = destroys
        results["airbnb/rooms/7/gone"] = "not found"

        await store.delete("airbnb/rooms/7/gone")

    @pytest.mark.asyncio
    async def test_delete_unexpected_result_raises(self, store, destroys):
        _, results = destroys
        results["airbnb/rooms/7/abc"] = "error"

        with pytest.raises(ImageStoreError):
            await store.delete("airbnb/rooms/7/abc")

    @pytest.mark.asyncio
    async def test_discard_images_continues_after_failure(self, store, destroys):
        calls, results = destroys
        results["first"] = cloudinary.exceptions.GeneralError("Socket Error")

        await discard_images(store, ["first", "second"])

        assert [call["public_id"] for call in calls] == ["first", "second"]
