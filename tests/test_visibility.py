import pytest

from comedy_connect.core.roles import Role
from comedy_connect.models import Show
from comedy_connect.services.visibility import ShowListMode, build_visibility_filter, can_view_show

from conftest import actor_for


def _visible_titles(db, actor, mode=None):
    rows = db.query(Show).filter(build_visibility_filter(actor, mode)).all()
    return {show.title for show in rows}


@pytest.fixture
def catalogue(make_user, make_show):
    """Two creators, each with a published upcoming show, a draft and a past show."""
    alice = make_user(Role.ORGANIZER_VERIFIED)
    bob = make_user(Role.COMEDIAN_VERIFIED)
    make_show(alice, title="alice-live", is_published=True)
    make_show(alice, title="alice-draft")
    make_show(alice, title="alice-past", is_published=True, days_ahead=-3)
    make_show(bob, title="bob-live", is_published=True)
    make_show(bob, title="bob-draft")
    make_show(bob, title="bob-past", days_ahead=-3)
    return alice, bob


def test_guest_sees_only_published_upcoming(db, catalogue):
    assert _visible_titles(db, None) == {"alice-live", "bob-live"}


def test_audience_sees_only_published_upcoming(db, catalogue, audience):
    assert _visible_titles(db, actor_for(audience)) == {"alice-live", "bob-live"}


def test_creator_default_includes_own_upcoming_drafts(db, catalogue):
    alice, _ = catalogue
    assert _visible_titles(db, actor_for(alice)) == {"alice-live", "alice-draft", "bob-live"}


def test_admin_default_sees_every_upcoming_show(db, catalogue, admin):
    assert _visible_titles(db, actor_for(admin)) == {
        "alice-live", "alice-draft", "bob-live", "bob-draft",
    }


def test_manage_mode_is_own_shows_including_drafts_and_past(db, catalogue):
    alice, _ = catalogue
    assert _visible_titles(db, actor_for(alice), ShowListMode.MANAGE) == {
        "alice-live", "alice-draft", "alice-past",
    }


def test_manage_mode_for_admin_is_also_scoped_to_own_shows(db, catalogue, admin):
    assert _visible_titles(db, actor_for(admin), ShowListMode.MANAGE) == set()


def test_manage_mode_without_actor_falls_back_to_public(db, catalogue):
    assert _visible_titles(db, None, ShowListMode.MANAGE) == {"alice-live", "bob-live"}


@pytest.mark.parametrize("mode", [ShowListMode.PUBLIC, ShowListMode.DISCOVERY])
def test_discovery_hides_own_drafts(db, catalogue, mode):
    alice, _ = catalogue
    assert _visible_titles(db, actor_for(alice), mode) == {"alice-live", "bob-live"}


def test_unverified_creator_sees_own_drafts(db, make_user, make_show):
    pending = make_user(Role.ORGANIZER_UNVERIFIED)
    make_show(pending, title="pending-draft")
    assert "pending-draft" in _visible_titles(db, actor_for(pending))


def test_can_view_show_hides_drafts_from_strangers(db, catalogue, audience, admin):
    alice, bob = catalogue
    draft = db.query(Show).filter(Show.title == "alice-draft").one()
    assert can_view_show(draft, actor_for(alice))
    assert can_view_show(draft, actor_for(admin))
    assert not can_view_show(draft, actor_for(bob))
    assert not can_view_show(draft, actor_for(audience))
    assert not can_view_show(draft, None)
