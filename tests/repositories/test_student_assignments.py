from datetime import datetime

import pytest

from homeschool.core.errors import BadRequestError, NotFoundError
from homeschool.repositories import assignments, student_assignments, students

DUE = datetime(2030, 1, 15, 17, 0)


@pytest.fixture
def assigned(db, seeded) -> dict:
    return student_assignments.assign(
        db,
        assignment_id=seeded.assignment_id,
        student_id=seeded.student_id,
        date_due=DUE,
    )


def test_assign(db, seeded, assigned) -> None:
    assert assigned['assignment_id'] == seeded.assignment_id
    assert assigned['student_id'] == seeded.student_id
    assert isinstance(assigned['date_assigned'], datetime)
    assert assigned['date_due'] == DUE
    assert assigned['date_submitted'] is None
    assert assigned['date_approved'] is None
    assert assigned['is_submitted'] is False
    assert assigned['is_approved'] is False


def test_assign_unknown_assignment(db, seeded) -> None:
    with pytest.raises(NotFoundError) as exception_info:
        student_assignments.assign(db, assignment_id=0, student_id=seeded.student_id, date_due=None)

    assert exception_info.value.message == 'No assignment with id: 0'


def test_assign_unknown_student(db, seeded) -> None:
    with pytest.raises(NotFoundError) as exception_info:
        student_assignments.assign(db, assignment_id=seeded.assignment_id, student_id=0, date_due=None)

    assert exception_info.value.message == 'No student with id: 0'


def test_get(db, assigned) -> None:
    assert student_assignments.get(db, assigned['id']) == assigned


def test_get_unknown(db, seeded) -> None:
    with pytest.raises(NotFoundError) as exception_info:
        student_assignments.get(db, 0)

    assert exception_info.value.message == 'No student assignment: 0'


def test_get_all_for_student_ordered_by_due_date(db, seeded, assigned) -> None:
    homework = assignments.create(
        db, title='HW1', subject_code='MATH1', instructions=None, teacher_id=seeded.teacher_id
    )
    earlier = student_assignments.assign(
        db, assignment_id=homework['id'], student_id=seeded.student_id, date_due=datetime(2029, 6, 1)
    )

    result = student_assignments.get_all_for_student(db, 'u5')

    assert [row['id'] for row in result] == [earlier['id'], assigned['id']]


def test_get_all_for_non_student(db, seeded) -> None:
    with pytest.raises(NotFoundError) as exception_info:
        student_assignments.get_all_for_student(db, 'u1')

    assert exception_info.value.message == 'No student: u1'


def test_get_all_for_assignment(db, seeded, assigned) -> None:
    other = students.add(db, 'u1', seeded.teacher_id, '2')
    second = student_assignments.assign(
        db, assignment_id=seeded.assignment_id, student_id=other['student_id'], date_due=DUE
    )

    result = student_assignments.get_all_for_assignment(db, seeded.assignment_id)

    assert [row['id'] for row in result] == [assigned['id'], second['id']]


def test_get_all_for_unknown_assignment(db, seeded) -> None:
    with pytest.raises(NotFoundError):
        student_assignments.get_all_for_assignment(db, 0)


def test_update_approval(db, assigned) -> None:
    approved_at = datetime(2030, 1, 16, 9, 30)

    result = student_assignments.update(
        db, assigned['id'], {'is_approved': True, 'date_approved': approved_at}
    )

    assert result['is_approved'] is True
    assert result['date_approved'] == approved_at
    assert result['is_submitted'] is False


def test_update_due_date(db, assigned) -> None:
    new_due = datetime(2030, 2, 1)

    assert student_assignments.update(db, assigned['id'], {'date_due': new_due})['date_due'] == new_due


def test_update_unknown(db, seeded) -> None:
    with pytest.raises(NotFoundError) as exception_info:
        student_assignments.update(db, 0, {'is_approved': True})

    assert exception_info.value.message == 'No student assignment: 0'


def test_update_without_data(db, assigned) -> None:
    with pytest.raises(BadRequestError):
        student_assignments.update(db, assigned['id'], {})


def test_toggle_submit_sets_and_clears(db, assigned) -> None:
    first = student_assignments.toggle_submit(db, assigned['id'])

    assert first == {'id': assigned['id'], 'is_submitted': True}
    assert isinstance(student_assignments.get(db, assigned['id'])['date_submitted'], datetime)

    second = student_assignments.toggle_submit(db, assigned['id'])

    assert second == {'id': assigned['id'], 'is_submitted': False}
    assert student_assignments.get(db, assigned['id'])['date_submitted'] is None


def test_toggle_submit_unknown(db, seeded) -> None:
    with pytest.raises(NotFoundError):
        student_assignments.toggle_submit(db, 0)


def test_delete(db, assigned) -> None:
    assert student_assignments.delete(db, assigned['id']) == {'deleted': assigned['id']}

    with pytest.raises(NotFoundError):
        student_assignments.get(db, assigned['id'])


def test_deleting_student_removes_their_assignments(db, seeded, assigned) -> None:
    students.delete(db, 'u5')

    with pytest.raises(NotFoundError):
        student_assignments.get(db, assigned['id'])
