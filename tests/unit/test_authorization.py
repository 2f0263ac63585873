"""Unit tests for the tenant-scoped authorization policy."""

from uuid import uuid4

import pytest
from hypothesis import given
from hypothesis import strategies as st

from src.taskhub.core.exceptions import NotFoundError, PermissionDeniedError
from src.taskhub.models import UserRole
from src.taskhub.schemas.tenant import RESTRICTED_TENANT_FIELDS
from src.taskhub.schemas.user import RESTRICTED_USER_FIELDS
from src.taskhub.services import authorization
from src.taskhub.services.authorization import Principal

pytestmark = pytest.mark.unit


def make_principal(role: UserRole, tenant_id=None) -> Principal:
    if tenant_id is None and role != UserRole.SUPER_ADMIN:
        tenant_id = uuid4()
    return Principal(user_id=uuid4(), tenant_id=tenant_id, role=role)


class TestTenantRead:
    def test_super_admin_reads_any_tenant(self):
        authorization.require_tenant_read(make_principal(UserRole.SUPER_ADMIN), uuid4())

    def test_member_reads_own_tenant(self):
        principal = make_principal(UserRole.USER)
        authorization.require_tenant_read(principal, principal.tenant_id)

    def test_other_tenant_is_forbidden(self):
        with pytest.raises(PermissionDeniedError):
            authorization.require_tenant_read(make_principal(UserRole.TENANT_ADMIN), uuid4())


class TestTenantUpdate:
    def test_tenant_admin_may_rename(self):
        principal = make_principal(UserRole.TENANT_ADMIN)
        authorization.require_tenant_update(
            principal, principal.tenant_id, ["name"], RESTRICTED_TENANT_FIELDS
        )

    @pytest.mark.parametrize("field", sorted(RESTRICTED_TENANT_FIELDS))
    def test_tenant_admin_restricted_field_rejected(self, field):
        principal = make_principal(UserRole.TENANT_ADMIN)
        with pytest.raises(PermissionDeniedError) as exc_info:
            authorization.require_tenant_update(
                principal, principal.tenant_id, ["name", field], RESTRICTED_TENANT_FIELDS
            )
        assert exc_info.value.message == "Cannot update restricted fields"

    def test_tenant_admin_of_other_tenant_rejected(self):
        with pytest.raises(PermissionDeniedError):
            authorization.require_tenant_update(
                make_principal(UserRole.TENANT_ADMIN), uuid4(), ["name"], RESTRICTED_TENANT_FIELDS
            )

    def test_plain_user_rejected(self):
        principal = make_principal(UserRole.USER)
        with pytest.raises(PermissionDeniedError):
            authorization.require_tenant_update(
                principal, principal.tenant_id, ["name"], RESTRICTED_TENANT_FIELDS
            )

    def test_super_admin_may_change_everything(self):
        authorization.require_tenant_update(
            make_principal(UserRole.SUPER_ADMIN),
            uuid4(),
            RESTRICTED_TENANT_FIELDS | {"name"},
            RESTRICTED_TENANT_FIELDS,
        )


class TestTenantList:
    def test_only_super_admin(self):
        authorization.require_super_admin(make_principal(UserRole.SUPER_ADMIN))
        for role in (UserRole.TENANT_ADMIN, UserRole.USER):
            with pytest.raises(PermissionDeniedError):
                authorization.require_super_admin(make_principal(role))


class TestUserManagement:
    def test_tenant_admin_of_tenant_may_create(self):
        principal = make_principal(UserRole.TENANT_ADMIN)
        authorization.require_tenant_admin_of(principal, principal.tenant_id)

    @pytest.mark.parametrize("role", [UserRole.USER, UserRole.SUPER_ADMIN])
    def test_non_tenant_admin_may_not_create(self, role):
        principal = make_principal(role)
        with pytest.raises(PermissionDeniedError):
            authorization.require_tenant_admin_of(principal, principal.tenant_id or uuid4())

    def test_self_delete_rejected(self):
        principal = make_principal(UserRole.TENANT_ADMIN)
        with pytest.raises(PermissionDeniedError) as exc_info:
            authorization.require_user_delete(principal, principal.user_id)
        assert exc_info.value.message == "Cannot delete yourself"

    def test_plain_user_may_not_delete(self):
        with pytest.raises(PermissionDeniedError):
            authorization.require_user_delete(make_principal(UserRole.USER), uuid4())

    def test_user_may_rename_self(self):
        principal = make_principal(UserRole.USER)
        authorization.require_user_update(
            principal, principal.user_id, principal.tenant_id, ["full_name"], RESTRICTED_USER_FIELDS
        )

    @pytest.mark.parametrize("field", sorted(RESTRICTED_USER_FIELDS))
    def test_user_may_not_change_own_restricted_fields(self, field):
        principal = make_principal(UserRole.USER)
        with pytest.raises(PermissionDeniedError) as exc_info:
            authorization.require_user_update(
                principal, principal.user_id, principal.tenant_id, [field], RESTRICTED_USER_FIELDS
            )
        assert exc_info.value.message == "Cannot update restricted fields"

    def test_user_may_not_update_someone_else(self):
        principal = make_principal(UserRole.USER)
        with pytest.raises(PermissionDeniedError):
            authorization.require_user_update(
                principal, uuid4(), principal.tenant_id, ["full_name"], RESTRICTED_USER_FIELDS
            )

    def test_tenant_admin_updates_member_role(self):
        principal = make_principal(UserRole.TENANT_ADMIN)
        authorization.require_user_update(
            principal, uuid4(), principal.tenant_id, ["role", "is_active"], RESTRICTED_USER_FIELDS
        )

    def test_tenant_admin_of_other_tenant_rejected(self):
        with pytest.raises(PermissionDeniedError):
            authorization.require_user_update(
                make_principal(UserRole.TENANT_ADMIN),
                uuid4(),
                uuid4(),
                ["full_name"],
                RESTRICTED_USER_FIELDS,
            )


class TestProjectsAndTasks:
    def test_project_in_other_tenant_is_not_found(self):
        with pytest.raises(NotFoundError):
            authorization.require_project_visible(make_principal(UserRole.TENANT_ADMIN), uuid4())

    def test_creator_may_modify_project(self):
        principal = make_principal(UserRole.USER)
        authorization.require_project_modify(principal, principal.user_id)

    def test_tenant_admin_may_modify_any_project(self):
        authorization.require_project_modify(make_principal(UserRole.TENANT_ADMIN), uuid4())

    def test_non_creator_may_not_modify(self):
        with pytest.raises(PermissionDeniedError):
            authorization.require_project_modify(make_principal(UserRole.USER), uuid4())

    def test_orphaned_project_only_admin(self):
        with pytest.raises(PermissionDeniedError):
            authorization.require_project_modify(make_principal(UserRole.USER), None)

    def test_task_in_other_tenant_is_forbidden(self):
        with pytest.raises(PermissionDeniedError) as exc_info:
            authorization.require_same_tenant(
                make_principal(UserRole.USER), uuid4(), "Task does not belong to your tenant"
            )
        assert exc_info.value.message == "Task does not belong to your tenant"

    def test_super_admin_has_no_tenant_context(self):
        with pytest.raises(PermissionDeniedError):
            authorization.require_tenant_context(make_principal(UserRole.SUPER_ADMIN))


@given(role=st.sampled_from(list(UserRole)), same_tenant=st.booleans())
def test_tenant_read_matches_membership(role: UserRole, same_tenant: bool):
    """Read access is exactly: super admin, or member of the tenant."""
    principal = make_principal(role)
    target = principal.tenant_id if same_tenant and principal.tenant_id else uuid4()
    allowed = role == UserRole.SUPER_ADMIN or target == principal.tenant_id

    if allowed:
        authorization.require_tenant_read(principal, target)
    else:
        with pytest.raises(PermissionDeniedError):
            authorization.require_tenant_read(principal, target)


@given(fields=st.sets(st.sampled_from(sorted(RESTRICTED_TENANT_FIELDS | {"name"}))))
def test_tenant_admin_update_allowed_iff_name_only(fields: set[str]):
    principal = make_principal(UserRole.TENANT_ADMIN)
    if fields <= {"name"}:
        authorization.require_tenant_update(
            principal, principal.tenant_id, fields, RESTRICTED_TENANT_FIELDS
        )
    else:
        with pytest.raises(PermissionDeniedError):
            authorization.require_tenant_update(
                principal, principal.tenant_id, fields, RESTRICTED_TENANT_FIELDS
            )
