"""Access policy decisions over plain facts."""

from uuid import uuid4

import pytest
from hypothesis import given
from hypothesis import strategies as st

from src.taskboard.models import Comment, Project
from src.taskboard.policies import (
    Caller,
    can_assign,
    can_change_status,
    can_manage_comment,
    can_modify,
    can_view,
    is_organizer,
    is_valid_assignee_candidate,
)

pytestmark = pytest.mark.unit

ORGANIZER_ID = uuid4()
MEMBER_ID = uuid4()


def _project(is_active: bool = True) -> Project:
    return Project(
        id=1,
        title="Launch",
        description="Launch plan",
        organizer_id=ORGANIZER_ID,
        is_active=is_active,
    )


organizer = Caller(user_id=ORGANIZER_ID)
member = Caller(user_id=MEMBER_ID)
stranger = Caller(user_id=uuid4())
admin = Caller(user_id=uuid4(), is_admin=True)


class TestView:
    def test_organizer_member_and_admin_can_view(self):
        project = _project()
        assert can_view(organizer, project, is_member=False)
        assert can_view(member, project, is_member=True)
        assert can_view(admin, project, is_member=False)

    def test_stranger_cannot_view(self):
        assert not can_view(stranger, _project(), is_member=False)

    def test_anonymous_cannot_view(self):
        assert not can_view(Caller.anonymous(), _project(), is_member=True)


class TestModifyAndAssign:
    def test_membership_alone_grants_no_modify(self):
        project = _project()
        assert not can_modify(member, project)
        assert not can_assign(member, project)

    def test_organizer_and_admin_can_modify(self):
        project = _project()
        for caller in (organizer, admin):
            assert can_modify(caller, project)
            assert can_assign(caller, project)


class TestStatusChange:
    def test_current_assignee_may_change_status(self):
        assert can_change_status(member, _project(), MEMBER_ID)

    def test_previous_assignee_may_not(self):
        assert not can_change_status(member, _project(), uuid4())

    def test_unassigned_task_only_for_modifiers(self):
        project = _project()
        assert not can_change_status(member, project, None)
        assert can_change_status(organizer, project, None)
        assert can_change_status(admin, project, None)


@given(
    is_admin=st.booleans(),
    is_member=st.booleans(),
    caller_is_organizer=st.booleans(),
    holds_task=st.booleans(),
)
def test_inactive_project_denies_everything(is_admin, is_member, caller_is_organizer, holds_task):
    project = _project(is_active=False)
    user_id = ORGANIZER_ID if caller_is_organizer else uuid4()
    caller = Caller(user_id=user_id, is_admin=is_admin)
    comment = Comment(id=1, task_id=1, user_id=user_id, text="hi")

    assert not can_view(caller, project, is_member=is_member)
    assert not can_modify(caller, project)
    assert not can_assign(caller, project)
    assert not can_change_status(caller, project, user_id if holds_task else None)
    assert not can_manage_comment(caller, project, comment, is_member=is_member)
    assert not is_valid_assignee_candidate(project, user_id, is_member=is_member)


@given(is_admin=st.booleans(), is_member=st.booleans())
def test_anonymous_caller_denied_on_active_project(is_admin, is_member):
    caller = Caller(user_id=None, is_admin=is_admin)
    project = _project()

    assert not can_view(caller, project, is_member=is_member)
    assert not can_modify(caller, project)
    assert not can_change_status(caller, project, None)


def test_is_organizer_with_no_user():
    assert not is_organizer(_project(), None)
    assert is_organizer(_project(), ORGANIZER_ID)


class TestAssigneeCandidates:
    def test_organizer_is_always_a_candidate(self):
        assert is_valid_assignee_candidate(_project(), ORGANIZER_ID, is_member=False)

    def test_active_member_is_a_candidate(self):
        assert is_valid_assignee_candidate(_project(), MEMBER_ID, is_member=True)

    def test_non_member_is_not(self):
        assert not is_valid_assignee_candidate(_project(), uuid4(), is_member=False)


class TestCommentManagement:
    def test_author_may_manage_own_comment(self):
        comment = Comment(id=1, task_id=1, user_id=MEMBER_ID, text="mine")
        assert can_manage_comment(member, _project(), comment, is_member=True)

    def test_organizer_may_not_manage_someone_elses_comment(self):
        comment = Comment(id=1, task_id=1, user_id=MEMBER_ID, text="mine")
        assert not can_manage_comment(organizer, _project(), comment, is_member=True)

    def test_admin_may_manage_any_comment(self):
        comment = Comment(id=1, task_id=1, user_id=MEMBER_ID, text="mine")
        assert can_manage_comment(admin, _project(), comment, is_member=False)

    def test_former_member_loses_own_comment(self):
        comment = Comment(id=1, task_id=1, user_id=MEMBER_ID, text="mine")
        assert not can_manage_comment(member, _project(), comment, is_member=False)
