import pytest

from src.shortlinks.core.exceptions import (
    EmailAlreadyExists,
    InvalidCredentials,
    MissingField,
    NotAuthenticated,
    NotFound,
    NotOwner,
)


class TestAccounts:
    def test_register_logs_in(self, access):
        account, token = access.handle_register("a@test.com", "pw1")
        assert access.handle_current_account(token).id == account.id

    def test_register_duplicate(self, access, owner):
        with pytest.raises(EmailAlreadyExists):
            access.handle_register("a@test.com", "pw1")
        assert access.credentials.count() == 1

    def test_register_missing_field(self, access):
        with pytest.raises(MissingField):
            access.handle_register("", "pw1")

    def test_login(self, access, owner):
        account, _ = owner
        logged_in, token = access.handle_login("a@test.com", "pw1")
        assert logged_in.id == account.id
        assert access.handle_current_account(token).id == account.id

    def test_login_failures_are_indistinguishable(self, access, owner):
        with pytest.raises(InvalidCredentials) as wrong_password:
            access.handle_login("a@test.com", "wrongpw")
        with pytest.raises(InvalidCredentials) as unknown_email:
            access.handle_login("nouser@test.com", "pw1")
        assert type(wrong_password.value) is type(unknown_email.value)
        assert str(wrong_password.value) == str(unknown_email.value)

    def test_logout(self, access, owner):
        _, token = owner
        access.handle_logout(token)
        assert access.handle_current_account(token) is None
        access.handle_logout(token)

    def test_anonymous(self, access):
        assert access.handle_current_account(None) is None
        assert access.handle_current_account("bogus") is None


class TestUrls:
    def test_scenario_visits(self, access):
        _, s1 = access.handle_register("a@test.com", "pw1")
        c1 = access.handle_create_url(s1, "http://example.com")

        assert access.handle_redirect("visitorX", c1) == "http://example.com"
        url = access.registry.get(c1)
        assert url.total_visits == 1
        assert url.unique_visitor_ids == {"visitorX"}

        access.handle_redirect("visitorX", c1)
        url = access.registry.get(c1)
        assert url.total_visits == 2
        assert url.unique_visitor_ids == {"visitorX"}

    def test_scenario_non_owner(self, access, owner, other):
        _, s1 = owner
        _, s2 = other
        c1 = access.handle_create_url(s1, "http://example.com")

        with pytest.raises(NotOwner):
            access.handle_update_url(s2, c1, "http://new.com")
        assert access.handle_list_urls(s2) == []
        assert access.registry.get(c1).destination == "http://example.com"

    def test_create_requires_session(self, access):
        with pytest.raises(NotAuthenticated):
            access.handle_create_url(None, "http://example.com")
        with pytest.raises(NotAuthenticated):
            access.handle_create_url("bogus", "http://example.com")

    def test_create_after_logout(self, access, owner):
        _, token = owner
        access.handle_logout(token)
        with pytest.raises(NotAuthenticated):
            access.handle_create_url(token, "http://example.com")

    def test_list_urls(self, access, owner, other):
        account, s1 = owner
        _, s2 = other
        mine = access.handle_create_url(s1, "http://one.com")
        access.handle_create_url(s2, "http://two.com")

        urls = access.handle_list_urls(s1)
        assert [url.short_code for url in urls] == [mine]
        assert urls[0].owner_id == account.id

    def test_list_urls_anonymous(self, access, owner):
        _, s1 = owner
        access.handle_create_url(s1, "http://one.com")
        assert access.handle_list_urls(None) == []

    def test_view_url(self, access, owner):
        _, s1 = owner
        code = access.handle_create_url(s1, "http://example.com")
        access.handle_redirect("v1", code)
        access.handle_redirect("v2", code)

        detail = access.handle_view_url(s1, code)
        assert detail.destination == "http://example.com"
        assert detail.total_visits == 2
        assert [visit.visitor_id for visit in detail.history] == ["v1", "v2"]

    def test_view_url_errors(self, access, owner, other):
        _, s1 = owner
        _, s2 = other
        code = access.handle_create_url(s1, "http://example.com")

        with pytest.raises(NotAuthenticated):
            access.handle_view_url(None, code)
        with pytest.raises(NotOwner):
            access.handle_view_url(s2, code)
        with pytest.raises(NotFound):
            access.handle_view_url(s1, "nope")

    def test_update_and_delete_by_owner(self, access, owner):
        _, s1 = owner
        code = access.handle_create_url(s1, "http://example.com")

        access.handle_update_url(s1, code, "http://new.com")
        assert access.handle_redirect("v1", code) == "http://new.com"

        access.handle_delete_url(s1, code)
        with pytest.raises(NotFound):
            access.handle_redirect("v1", code)

    def test_delete_by_non_owner(self, access, owner, other):
        _, s1 = owner
        _, s2 = other
        code = access.handle_create_url(s1, "http://example.com")
        with pytest.raises(NotOwner):
            access.handle_delete_url(s2, code)
        with pytest.raises(NotAuthenticated):
            access.handle_delete_url(None, code)
        assert access.registry.get(code) is not None

    def test_redirect_is_not_ownership_restricted(self, access, owner):
        _, s1 = owner
        code = access.handle_create_url(s1, "http://example.com")
        assert access.handle_redirect("stranger", code) == "http://example.com"
