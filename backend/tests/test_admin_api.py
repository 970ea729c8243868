"""Tests for the admin catalog endpoints."""
from conftest import album_data, standalone_data, track_data


class TestAccess:
    def test_requires_authentication(self, client):
        assert client.get("/api/admin/albums").status_code == 401

    def test_requires_admin_role(self, client, auth_headers):
        response = client.get("/api/admin/albums", headers=auth_headers)
        assert response.status_code == 403

    def test_admin_sees_all_albums(self, client, catalog, admin_auth_headers, test_album):
        from catalog.schemas.album import AlbumForm
        catalog.create_album(AlbumForm.model_validate(album_data(catalog_number="ANG-7", visibility="Admin")))

        response = client.get("/api/admin/albums", headers=admin_auth_headers)
        assert response.status_code == 200
        assert len(response.json()) == 2


class TestAlbums:
    def test_create_album(self, client, admin_auth_headers):
        response = client.post("/api/admin/albums", json=album_data(), headers=admin_auth_headers)

        assert response.status_code == 201
        data = response.json()
        assert data["catalog_number_display"] == "ANG-V"
        assert data["streaming_links"] == {"spotify": "https://open.spotify.com/album/xyz"}

    def test_create_album_field_errors(self, client, admin_auth_headers):
        data = album_data(catalog_number="ANG 5")
        del data["artwork_front"]

        response = client.post("/api/admin/albums", json=data, headers=admin_auth_headers)

        assert response.status_code == 422
        fields = {e["field"] for e in response.json()["detail"]}
        assert fields == {"catalog_number", "artwork_front"}

    def test_duplicate_catalog_number_is_409(self, client, admin_auth_headers, test_album):
        response = client.post("/api/admin/albums", json=album_data(), headers=admin_auth_headers)
        assert response.status_code == 409

    def test_patch_merges_over_stored_values(self, client, admin_auth_headers, test_album):
        response = client.patch(
            f"/api/admin/albums/{test_album.id}",
            json={"visibility": "VIP"},
            headers=admin_auth_headers,
        )

        assert response.status_code == 200
        data = response.json()
        assert data["visibility"] == "VIP"
        assert data["album_name"] == "Night Drive"
        assert data["album_duration"] == "41:07"
        assert data["producers"] == ["Ada Lane", "Kim Ro"]

    def test_patch_validates_merged_form(self, client, admin_auth_headers, test_album):
        response = client.patch(
            f"/api/admin/albums/{test_album.id}",
            json={"album_duration": "41:99"},
            headers=admin_auth_headers,
        )
        assert response.status_code == 422
        assert response.json()["detail"] == [
            {"field": "album_duration", "message": "Seconds must be less than 60"}
        ]

    def test_patch_missing_album(self, client, admin_auth_headers):
        response = client.patch("/api/admin/albums/999", json={}, headers=admin_auth_headers)
        assert response.status_code == 404

    def test_delete_album_removes_tracks(self, client, admin_auth_headers, test_album, test_track):
        response = client.delete(f"/api/admin/albums/{test_album.id}", headers=admin_auth_headers)
        assert response.status_code == 200

        assert client.get(f"/api/admin/albums/{test_album.id}", headers=admin_auth_headers).status_code == 404
        assert client.get(f"/api/admin/tracks/{test_track.track_id}", headers=admin_auth_headers).status_code == 404


class TestTracks:
    def test_create_and_list(self, client, admin_auth_headers, test_album):
        url = f"/api/admin/albums/{test_album.id}/tracks"
        response = client.post(url, json=track_data(), headers=admin_auth_headers)
        assert response.status_code == 201
        assert response.json()["duration"] == "03:45"

        listed = client.get(url, headers=admin_auth_headers).json()
        assert [t["track_name"] for t in listed] == ["Headlights"]

    def test_duplicate_track_number_is_409(self, client, admin_auth_headers, test_album, test_track):
        response = client.post(
            f"/api/admin/albums/{test_album.id}/tracks",
            json=track_data(track_name="Other"),
            headers=admin_auth_headers,
        )
        assert response.status_code == 409

    def test_track_for_missing_album_is_404(self, client, admin_auth_headers):
        response = client.post("/api/admin/albums/999/tracks", json=track_data(), headers=admin_auth_headers)
        assert response.status_code == 404

    def test_patch_track(self, client, admin_auth_headers, test_track):
        response = client.patch(
            f"/api/admin/tracks/{test_track.track_id}",
            json={"track_status": "SHELVED", "stage_of_production": "SHELVED"},
            headers=admin_auth_headers,
        )
        assert response.status_code == 200
        data = response.json()
        assert data["track_status"] == "SHELVED"
        assert data["track_name"] == "Headlights"

    def test_invalid_duration(self, client, admin_auth_headers, test_album):
        response = client.post(
            f"/api/admin/albums/{test_album.id}/tracks",
            json=track_data(duration="3:75"),
            headers=admin_auth_headers,
        )
        assert response.status_code == 422
        assert response.json()["detail"][0]["field"] == "duration"

    def test_delete_track(self, client, admin_auth_headers, test_track):
        url = f"/api/admin/tracks/{test_track.track_id}"
        assert client.delete(url, headers=admin_auth_headers).status_code == 200
        assert client.delete(url, headers=admin_auth_headers).status_code == 404


class TestStandaloneTracks:
    def test_crud(self, client, admin_auth_headers):
        response = client.post(
            "/api/admin/standalone-tracks",
            json=standalone_data(visibility="Private"),
            headers=admin_auth_headers,
        )
        assert response.status_code == 201
        track_id = response.json()["track_id"]

        listed = client.get("/api/admin/standalone-tracks", headers=admin_auth_headers).json()
        assert [t["track_id"] for t in listed] == [track_id]
        # Private tracks stay out of the public list
        assert client.get("/api/standalone-tracks").json() == []

        response = client.patch(
            f"/api/admin/standalone-tracks/{track_id}",
            json={"visibility": "Public"},
            headers=admin_auth_headers,
        )
        assert response.json()["visibility"] == "Public"
        assert len(client.get("/api/standalone-tracks").json()) == 1

        assert client.delete(f"/api/admin/standalone-tracks/{track_id}", headers=admin_auth_headers).status_code == 200

    def test_notes(self, client, admin_auth_headers, test_standalone_track):
        url = f"/api/admin/standalone-tracks/{test_standalone_track.track_id}/notes"
        first = client.post(url, json={"note_content": "Vocals too loud", "user_initials": "AL"}, headers=admin_auth_headers)
        assert first.status_code == 201
        client.post(
            url,
            json={"note_content": '<script>x()</script><iframe src="https://p.example.com/2"></iframe>', "user_initials": "KR"},
            headers=admin_auth_headers,
        )

        notes = client.get(url, headers=admin_auth_headers).json()
        assert [n["user_initials"] for n in notes] == ["KR", "AL"]
        assert "<script" not in notes[0]["note_content"]
        assert "<iframe" in notes[0]["note_content"]

    def test_note_validation(self, client, admin_auth_headers, test_standalone_track):
        url = f"/api/admin/standalone-tracks/{test_standalone_track.track_id}/notes"
        response = client.post(url, json={"note_content": "x", "user_initials": "TOO-LONG-INITIALS"}, headers=admin_auth_headers)
        assert response.status_code == 422
        assert response.json()["detail"][0]["field"] == "user_initials"
