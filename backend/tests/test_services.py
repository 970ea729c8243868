"""Tests for the catalog and standalone track services."""
import pytest

from catalog.errors import Conflict, NotFound
from catalog.models.enums import AlbumStatus, StandaloneVisibility, Visibility
from catalog.models.track import Track
from catalog.models.standalone_track import StandaloneTrackNote
from catalog.schemas.album import AlbumForm
from catalog.schemas.track import NoteForm, StandaloneTrackForm, TrackForm
from conftest import album_data, standalone_data, track_data


def album_form(**overrides):
    return AlbumForm.model_validate(album_data(**overrides))


class TestAlbums:
    def test_removed_non_public_album_not_listed(self, catalog):
        """Visibility filters the public list whatever the status."""
        catalog.create_album(album_form(
            catalog_number="ANG-9",
            status="Removed",
            removal_date="2025-02-01",
            visibility="VIP",
        ))
        assert catalog.list_public_albums() == []
        assert len(catalog.list_albums()) == 1

    def test_removed_public_album_still_listed(self, catalog):
        album = catalog.create_album(album_form(status="Removed", removal_date="2025-02-01"))
        assert album.status == AlbumStatus.REMOVED
        assert [a.id for a in catalog.list_public_albums()] == [album.id]

    def test_public_list_ordered_by_release_date(self, catalog):
        older = catalog.create_album(album_form(catalog_number="ANG-1", release_date="2020-01-01"))
        undated = catalog.create_album(album_form(catalog_number="ANG-2", release_date=""))
        newer = catalog.create_album(album_form(catalog_number="ANG-3", release_date="2023-06-30"))
        assert [a.id for a in catalog.list_public_albums()] == [newer.id, older.id, undated.id]

    def test_public_search(self, catalog):
        catalog.create_album(album_form(catalog_number="ANG-1", album_name="Night Drive"))
        catalog.create_album(album_form(catalog_number="XYZ-2", album_name="Daybreak", album_artist="Solo"))
        assert [a.album_name for a in catalog.list_public_albums("night")] == ["Night Drive"]
        assert [a.album_name for a in catalog.list_public_albums("xyz")] == ["Daybreak"]
        assert len(catalog.list_public_albums("  ")) == 2

    def test_get_public_album_hides_admin_albums(self, catalog):
        album = catalog.create_album(album_form(visibility="Admin"))
        assert catalog.get_public_album(album.id) is None
        assert catalog.get_album(album.id) is not None

    def test_duplicate_catalog_number_conflicts(self, catalog, test_album):
        with pytest.raises(Conflict) as exc:
            catalog.create_album(album_form(album_name="Other"))
        assert "catalog number" in str(exc.value)
        # Session is usable after the rollback
        assert len(catalog.list_albums()) == 1

    def test_update_album(self, catalog, test_album):
        updated = catalog.update_album(test_album.id, album_form(album_name="Night Drive (Deluxe)", visibility="VIP"))
        assert updated.album_name == "Night Drive (Deluxe)"
        assert updated.visibility == Visibility.VIP

    def test_update_missing_album(self, catalog):
        with pytest.raises(NotFound):
            catalog.update_album(999, album_form())

    def test_credits_stored_tagged(self, test_album):
        assert test_album.producers == [
            {"kind": "plain", "name": "Ada Lane"},
            {"kind": "contributor", "name": "Kim Ro", "role": "co-producer"},
        ]
        assert test_album.album_duration == "41 minutes 7 seconds"

    def test_writes_require_validated_forms(self, catalog):
        with pytest.raises(TypeError):
            catalog.create_album(album_data())

    def test_delete_album_cascades_to_tracks(self, db, catalog, test_album, test_track):
        catalog.delete_album(test_album.id)
        db.expire_all()
        assert db.query(Track).count() == 0


class TestTracks:
    def test_tracks_ordered_by_number(self, catalog, test_album):
        for number in (3, 1, 2):
            catalog.create_track(test_album.id, TrackForm.model_validate(
                track_data(track_number=number, track_name=f"Song {number}")
            ))
        assert [t.track_number for t in catalog.list_tracks(test_album.id)] == [1, 2, 3]

    def test_public_only_filters_tracks(self, catalog, test_album, test_track):
        catalog.create_track(test_album.id, TrackForm.model_validate(
            track_data(track_number=2, visibility="Admin")
        ))
        assert len(catalog.list_tracks(test_album.id)) == 2
        assert [t.track_id for t in catalog.list_tracks(test_album.id, public_only=True)] == [test_track.track_id]

    def test_duplicate_track_number_conflicts(self, catalog, test_album, test_track):
        with pytest.raises(Conflict) as exc:
            catalog.create_track(test_album.id, TrackForm.model_validate(track_data(track_name="Again")))
        assert "track with that number" in str(exc.value)

    def test_track_needs_existing_album(self, catalog):
        with pytest.raises(NotFound):
            catalog.create_track(42, TrackForm.model_validate(track_data()))

    def test_update_and_delete_track(self, catalog, test_track):
        updated = catalog.update_track(test_track.track_id, TrackForm.model_validate(
            track_data(track_name="Headlights (Edit)", duration="2:59")
        ))
        assert updated.duration == "2 minutes 59 seconds"

        catalog.delete_track(test_track.track_id)
        assert catalog.get_track(test_track.track_id) is None


class TestStandaloneTracks:
    def test_public_list_only_public(self, standalone, test_standalone_track):
        standalone.create_standalone_track(StandaloneTrackForm.model_validate(
            standalone_data(track_name="Secret", visibility="Private")
        ))
        standalone.create_standalone_track(StandaloneTrackForm.model_validate(
            standalone_data(track_name="Link only", visibility="Unlisted")
        ))
        public = standalone.list_public_standalone_tracks()
        assert [t.track_id for t in public] == [test_standalone_track.track_id]
        assert len(standalone.list_standalone_tracks()) == 3

    def test_update(self, standalone, test_standalone_track):
        updated = standalone.update_standalone_track(
            test_standalone_track.track_id,
            StandaloneTrackForm.model_validate(standalone_data(visibility="Unlisted")),
        )
        assert updated.visibility == StandaloneVisibility.UNLISTED

    def test_notes_newest_first(self, standalone, test_standalone_track):
        track_id = test_standalone_track.track_id
        first = standalone.add_note(track_id, NoteForm(note_content="first", user_initials="AL"))
        second = standalone.add_note(track_id, NoteForm(note_content="second", user_initials="KR"))
        assert [n.id for n in standalone.list_notes(track_id)] == [second.id, first.id]

    def test_note_on_missing_track(self, standalone):
        with pytest.raises(NotFound):
            standalone.add_note(7, NoteForm(note_content="x", user_initials="AL"))

    def test_delete_cascades_to_notes(self, db, standalone, test_standalone_track):
        track_id = test_standalone_track.track_id
        standalone.add_note(track_id, NoteForm(note_content="x", user_initials="AL"))
        standalone.delete_standalone_track(track_id)
        db.expire_all()
        assert db.query(StandaloneTrackNote).count() == 0
