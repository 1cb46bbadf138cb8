"""
Property-based tests with Hypothesis.
"""

import pytest
from hypothesis import HealthCheck, assume, given, settings, strategies as st

from pos_api.models import Admin, is_valid_id, new_id
from pos_api.repositories import DEFAULT_SORT
from pos_api.routers._common import parse_sort
from pos_api.services.base_service import project
from pos_api.services.domain import TableService
from pos_api.services.permissions import PermissionContext, Resource
from shared.config.constants import Roles
from shared.security.password import MAX_PASSWORD_BYTES
from shared.utils.exceptions import ValidationError, field_label
from tests.helpers import ADMIN, API, GUEST, bearer

wire_keys = st.text(alphabet="abcdefghijklmnopqrstuvwxyzABCDEFGHIJ_", min_size=1, max_size=20)


class TestIdentifiers:
    @given(st.integers(min_value=0, max_value=50))
    @settings(max_examples=20)
    def test_new_ids_are_valid(self, _):
        assert is_valid_id(new_id())

    @given(st.text(max_size=40))
    def test_only_32_hex_chars_are_ids(self, value):
        expected = len(value) == 32 and all(c in "0123456789abcdef" for c in value)
        assert is_valid_id(value) is expected


class TestSortParsing:
    @given(field=wire_keys, direction=st.sampled_from(["asc", "desc", "ASC", "Desc"]))
    def test_known_directions(self, field, direction):
        sort = parse_sort(f"{field}:{direction}")
        assert sort.field == field
        assert sort.descending is (direction.lower() == "desc")

    @given(field=wire_keys, direction=st.text(alphabet="xyzqw", min_size=1, max_size=5))
    def test_unknown_direction_disables_sorting(self, field, direction):
        assert parse_sort(f"{field}:{direction}") is None

    @given(field=wire_keys, suffix=st.sampled_from(["", ":", ": "]))
    def test_missing_direction_disables_sorting(self, field, suffix):
        assert parse_sort(f"{field}{suffix}") is None

    def test_absent_sort_is_newest_first(self):
        assert parse_sort(None) == DEFAULT_SORT
        assert parse_sort("  ") == DEFAULT_SORT


class TestProjection:
    document = {"_id": "a" * 32, "name": "Table 1", "createdAt": "x", "updatedAt": "y"}

    @given(st.lists(st.sampled_from(["name", "createdAt", "updatedAt", "unknown"]), min_size=1))
    def test_includes_always_keep_id(self, fields):
        projected = project(self.document, fields)

        assert "_id" in projected
        assert set(projected) <= {"_id"} | set(fields)

    @given(st.lists(st.sampled_from(["-name", "-createdAt", "-updatedAt", "-_id"]), min_size=1))
    def test_excludes_drop_fields(self, fields):
        projected = project(self.document, fields)

        assert not {name[1:] for name in fields} & set(projected)
        assert set(projected) | {name[1:] for name in fields} == set(self.document)


class TestWhitelist:
    @given(st.dictionaries(wire_keys, st.integers(), min_size=1, max_size=5))
    @settings(suppress_health_check=[HealthCheck.function_scoped_fixture])
    def test_any_unknown_field_rejects_whole_update(self, db_session, changes):
        assume(set(changes) - TableService.mutable_fields)

        with pytest.raises(ValidationError) as exc_info:
            TableService(db_session).check_mutable(changes)

        rejected = set(changes) - TableService.mutable_fields
        assert set(exc_info.value.errors) == rejected
        for key in rejected:
            assert exc_info.value.errors[key] == f"{field_label(key)} cannot be modified."


class TestRowScoping:
    ids = st.text(alphabet="0123456789abcdef", min_size=32, max_size=32)

    @given(own_id=ids, requested=st.one_of(st.none(), ids))
    def test_cashier_list_is_always_own(self, own_id, requested):
        ctx = PermissionContext(Admin(id=own_id, role=Roles.CASHIER))
        filters = {} if requested is None else {"admin": requested}

        assert ctx.scope_filters(Resource.ORDER, filters)["admin"] == own_id

    @given(own_id=ids, requested=ids)
    def test_management_filter_is_kept(self, own_id, requested):
        ctx = PermissionContext(Admin(id=own_id, role=Roles.ADMIN))

        assert ctx.scope_filters(Resource.ORDER, {"admin": requested}) == {"admin": requested}


padding = st.text(alphabet=" ", max_size=3)
secret_core = st.text(
    alphabet=st.characters(blacklist_categories=("Cs", "Cc")),
    min_size=8,
    max_size=16,
)
secrets = st.builds(lambda left, core, right: left + core + right, padding, secret_core, padding)
names = st.text(alphabet="abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ", min_size=1, max_size=20)


class TestRegisterThenLogin:
    @given(
        first_name=names,
        last_name=names,
        phone_number=st.from_regex(r"01[0-9]{9}", fullmatch=True),
        role=st.sampled_from(Roles.ALL),
        password=secrets,
    )
    @settings(
        max_examples=25,
        deadline=None,
        suppress_health_check=[HealthCheck.function_scoped_fixture],
    )
    def test_registered_secret_logs_in(
        self, client, super_admin_headers, first_name, last_name, phone_number, role, password
    ):
        assert len(password.encode("utf-8")) <= MAX_PASSWORD_BYTES
        email = f"staff-{new_id()}@shababeek.com"
        payload = {
            "firstName": first_name,
            "lastName": last_name,
            "phoneNumber": phone_number,
            "email": email,
            "password": password,
            "role": role,
        }
        created = client.post(f"{API}/admins", params=ADMIN, json=payload, headers=super_admin_headers)
        assert created.status_code == 201, created.text

        response = client.post(
            f"{API}/admins/login",
            params=GUEST,
            json={"email": email, "password": password},
        )
        assert response.status_code == 200, response.text

        me = client.get(f"{API}/admins/me", params=ADMIN, headers=bearer(response.json()["token"]))
        assert me.status_code == 200
        assert me.json()["email"] == email
        assert me.json()["role"] == role
