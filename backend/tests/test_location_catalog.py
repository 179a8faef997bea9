"""
Tests for the catalog service: creation as pending, slug handling,
update authorization order, delete and moderation.
"""

import pytest
from sqlmodel import Session, select

from app.models.category import Category
from app.models.location import Location
from app.models.location_owner import LocationOwner
from app.models.location_tag import LocationTag
from app.models.photo import Photo
from app.services.errors import ForbiddenError, InvalidInputError, NotFoundError
from app.services.location_catalog import (
    create_location,
    get_location,
    moderate_location,
    remove_location,
    update_location,
)
from app.services.ownership import Actor
from tests.helpers import add_vote, make_location, make_owner, make_tag, make_user

ADMIN = Actor(id="root", role="admin")


def _payload(**overrides):
    data = {
        "name_vi": "Quán Cơm Nhà",
        "name_en": "Home Rice Eatery",
        "latitude": 16.0544,
        "longitude": 108.2022,
        "address_vi": "45 Lê Duẩn, Hải Châu",
        "district_vi": "Hải Châu",
        "cuisine_vi": "Việt Nam",
        "category": "food",
        "price_range": "duoi-100k",
    }
    data.update(overrides)
    return data


@pytest.fixture(name="users")
def users_fixture(session: Session):
    make_user(session, "alice")
    make_user(session, "bob")
    make_user(session, "root", role="admin")


class TestCreate:
    def test_created_pending_with_slugs(self, session: Session, users):
        location = create_location(session, _payload(), "alice")

        assert location.status == "pending"
        assert location.submitted_by == "alice"
        assert location.approved_by is None
        assert location.slug_vi == "quan-com-nha"
        assert location.slug_en == "home-rice-eatery"

    def test_without_english_name_has_no_english_slug(self, session: Session, users):
        location = create_location(session, _payload(name_en=None), "alice")
        assert location.slug_en is None

    def test_colliding_names_get_numbered_slugs(self, session: Session, users):
        first = create_location(session, _payload(), "alice")
        second = create_location(session, _payload(), "bob")
        third = create_location(session, _payload(name_vi="QUÁN  cơm nhà!"), "bob")

        assert first.slug_vi == "quan-com-nha"
        assert second.slug_vi == "quan-com-nha-2"
        assert third.slug_vi == "quan-com-nha-3"
        assert second.slug_en == "home-rice-eatery-2"

    def test_pending_location_is_not_publicly_readable(self, session: Session, users):
        location = create_location(session, _payload(), "alice")
        with pytest.raises(NotFoundError):
            get_location(session, location.id)

    def test_service_owned_fields_rejected(self, session: Session, users):
        with pytest.raises(InvalidInputError):
            create_location(session, _payload(status="approved"), "alice")

    def test_unknown_category_reference_rejected(self, session: Session, users):
        with pytest.raises(InvalidInputError):
            create_location(session, _payload(category_id="nope"), "alice")

    def test_known_category_reference_kept(self, session: Session, users):
        session.add(Category(id="cat-cafe", slug="cafe", name_vi="Cà phê", sort_order=2))
        session.commit()
        location = create_location(session, _payload(category="cafe", category_id="cat-cafe"), "alice")
        assert location.category_id == "cat-cafe"


class TestGet:
    def test_detail_includes_photos_primary_first_and_submitter(self, session: Session, users):
        location = make_location(session, "Cộng Cà Phê", "alice")
        session.add(Photo(id="p1", location_id=location.id, user_id="bob", url="https://img/1.jpg"))
        session.add(Photo(id="p2", location_id=location.id, user_id="alice", url="https://img/2.jpg", is_primary=True))
        session.commit()

        detail = get_location(session, location.id)

        assert detail.location.id == location.id
        assert [p.id for p in detail.photos] == ["p2", "p1"]
        assert detail.submitter.id == "alice"
        assert detail.submitter.name == "Alice"

    def test_missing_or_hidden_is_not_found(self, session: Session, users):
        rejected = make_location(session, "Closed", "alice", status="rejected")
        with pytest.raises(NotFoundError):
            get_location(session, "does-not-exist")
        with pytest.raises(NotFoundError):
            get_location(session, rejected.id)


class TestUpdate:
    def test_missing_location_is_not_found_even_for_strangers(self, session: Session, users):
        with pytest.raises(NotFoundError):
            update_location(session, "does-not-exist", {"phone": "0905"}, Actor(id="bob"))

    def test_stranger_is_forbidden_and_nothing_changes(self, session: Session, users):
        location = make_location(session, "Quán Cơm Nhà", "alice", slug_vi="quan-com-nha")

        with pytest.raises(ForbiddenError):
            update_location(session, location.id, {"name_vi": "Hacked Name"}, Actor(id="bob"))

        session.expire_all()
        stored = session.get(Location, location.id)
        assert stored.name_vi == "Quán Cơm Nhà"
        assert stored.slug_vi == "quan-com-nha"

    def test_submitter_alone_is_not_an_owner(self, session: Session, users):
        location = make_location(session, "Quán Cơm Nhà", "alice")
        with pytest.raises(ForbiddenError):
            update_location(session, location.id, {"phone": "0905"}, Actor(id="alice"))

    def test_pending_owner_is_forbidden(self, session: Session, users):
        location = make_location(session, "Quán Cơm Nhà", "alice")
        make_owner(session, location.id, "bob", "pending")
        with pytest.raises(ForbiddenError):
            update_location(session, location.id, {"phone": "0905"}, Actor(id="bob"))

    def test_approved_owner_updates_and_slug_follows_name(self, session: Session, users):
        location = make_location(session, "Quán Cơm Nhà", "alice")
        make_owner(session, location.id, "bob", "approved")
        before = location.updated_at

        updated = update_location(
            session, location.id, {"name_vi": "Cơm Gà Bà Buội", "phone": "0905 123 456"}, Actor(id="bob")
        )

        assert updated.name_vi == "Cơm Gà Bà Buội"
        assert updated.slug_vi == "com-ga-ba-buoi"
        assert updated.phone == "0905 123 456"
        assert updated.submitted_by == "alice"
        assert updated.updated_at > before

    def test_slug_untouched_when_name_not_in_patch(self, session: Session, users):
        location = make_location(session, "Quán Cơm Nhà", "alice", slug_vi="quan-com-nha")
        updated = update_location(session, location.id, {"website": "https://example.vn"}, ADMIN)
        assert updated.slug_vi == "quan-com-nha"

    def test_renaming_to_own_name_keeps_slug(self, session: Session, users):
        location = make_location(session, "Quán Cơm Nhà", "alice", slug_vi="quan-com-nha")
        updated = update_location(session, location.id, {"name_vi": "Quán Cơm Nhà"}, ADMIN)
        assert updated.slug_vi == "quan-com-nha"

    def test_clearing_english_name_clears_english_slug(self, session: Session, users):
        location = make_location(session, "Quán Cơm Nhà", "alice", name_en="Home Rice", slug_en="home-rice")
        updated = update_location(session, location.id, {"name_en": None}, ADMIN)
        assert updated.name_en is None
        assert updated.slug_en is None

    def test_admin_may_edit_pending_location(self, session: Session, users):
        location = make_location(session, "Pending Place", "alice", status="pending")
        updated = update_location(session, location.id, {"hours_open": "07:00"}, ADMIN)
        assert updated.hours_open == "07:00"
        assert updated.status == "pending"

    def test_moderation_fields_cannot_be_patched(self, session: Session, users):
        location = make_location(session, "Quán Cơm Nhà", "alice")
        with pytest.raises(InvalidInputError):
            update_location(session, location.id, {"submitted_by": "bob"}, ADMIN)


class TestRemove:
    def test_delete_cascades_and_is_repeatable(self, session: Session, users):
        location = make_location(session, "Quán Cơm Nhà", "alice")
        make_owner(session, location.id, "bob", "approved")
        make_tag(session, "t1", "Ăn ngon")
        add_vote(session, location.id, "t1", "bob")
        location_id = location.id

        remove_location(session, location_id)
        session.expire_all()

        assert session.get(Location, location_id) is None
        assert session.exec(select(LocationTag).where(LocationTag.location_id == location_id)).all() == []
        assert session.exec(select(LocationOwner).where(LocationOwner.location_id == location_id)).all() == []

        # Already gone: still a success
        remove_location(session, location_id)


class TestModerate:
    def test_approve_makes_location_public(self, session: Session, users):
        location = create_location(session, _payload(), "alice")

        approved = moderate_location(session, location.id, "approved", "root")

        assert approved.status == "approved"
        assert approved.approved_by == "root"
        assert get_location(session, location.id).location.id == location.id

    def test_reject_hides_and_clears_approver(self, session: Session, users):
        location = make_location(session, "Quán Cơm Nhà", "alice", approved_by="root")

        rejected = moderate_location(session, location.id, "rejected", "root")

        assert rejected.status == "rejected"
        assert rejected.approved_by is None
        with pytest.raises(NotFoundError):
            get_location(session, location.id)

    def test_unknown_target_status(self, session: Session, users):
        location = make_location(session, "Quán Cơm Nhà", "alice")
        with pytest.raises(InvalidInputError):
            moderate_location(session, location.id, "pending", "root")

    def test_missing_location(self, session: Session, users):
        with pytest.raises(NotFoundError):
            moderate_location(session, "does-not-exist", "approved", "root")
