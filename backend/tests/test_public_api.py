"""Tests for the public catalog endpoints."""
from catalog.schemas.album import AlbumForm
from catalog.schemas.track import StandaloneTrackForm, TrackForm
from conftest import album_data, standalone_data, track_data


def test_list_albums_display_fields(client, test_album):
    response = client.get("/api/albums")

    assert response.status_code == 200
    albums = response.json()
    assert len(albums) == 1
    album = albums[0]
    assert album["catalog_number"] == "ANG-5"
    assert album["catalog_number_display"] == "ANG-V"
    assert album["album_duration"] == "41:07"
    assert album["producers"] == ["Ada Lane", "Kim Ro"]
    assert album["artworks"] == ["https://cdn.example.com/night-drive/front.jpg"]


def test_non_public_albums_hidden(client, catalog):
    catalog.create_album(AlbumForm.model_validate(album_data(
        catalog_number="ANG-6", status="Removed", removal_date="2025-01-01", visibility="VIP",
    )))

    assert client.get("/api/albums").json() == []


def test_search(client, test_album):
    assert len(client.get("/api/albums", params={"q": "ferals"}).json()) == 1
    assert client.get("/api/albums", params={"q": "nothing-like-this"}).json() == []


def test_get_album(client, test_album):
    response = client.get(f"/api/albums/{test_album.id}")
    assert response.status_code == 200
    assert response.json()["album_name"] == "Night Drive"


def test_get_hidden_album_is_404(client, catalog):
    album = catalog.create_album(AlbumForm.model_validate(album_data(visibility="Admin")))
    assert client.get(f"/api/albums/{album.id}").status_code == 404
    assert client.get(f"/api/albums/{album.id}/tracks").status_code == 404


def test_album_tracks_sanitized_and_filtered(client, catalog, test_album, test_track):
    catalog.create_track(test_album.id, TrackForm.model_validate(
        track_data(track_number=2, track_name="Hidden", visibility="VIP")
    ))

    response = client.get(f"/api/albums/{test_album.id}/tracks")

    assert response.status_code == 200
    tracks = response.json()
    assert [t["track_name"] for t in tracks] == ["Headlights"]
    assert tracks[0]["duration"] == "03:45"
    assert "onload" not in tracks[0]["stream_embed"]
    assert "<iframe" in tracks[0]["stream_embed"]


def test_standalone_tracks_public_only(client, standalone, test_standalone_track):
    standalone.create_standalone_track(StandaloneTrackForm.model_validate(
        standalone_data(track_name="Unlisted", visibility="Unlisted")
    ))

    response = client.get("/api/standalone-tracks")

    assert response.status_code == 200
    assert [t["track_name"] for t in response.json()] == ["Loose Thread"]


def test_health(client):
    response = client.get("/api/health")
    assert response.status_code == 200
    assert response.json()["checks"]["database"] == "ok"


def test_root(client):
    assert client.get("/").json()["name"] == "Label Catalog"
