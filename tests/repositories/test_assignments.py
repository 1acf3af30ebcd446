import pytest

from homeschool.core.errors import BadRequestError, NotFoundError
from homeschool.models.student_assignment import StudentAssignment
from homeschool.repositories import assignments, student_assignments, subjects


def test_subjects_are_seeded(db) -> None:
    codes = [subject['code'] for subject in subjects.get_all(db)]

    assert {'MATH1', 'SCI1', 'LANG1', 'HIST1', 'ART1', 'MUSIC1', 'PE1'} <= set(codes)
    assert codes == sorted(codes)


def test_create(db, seeded) -> None:
    assignment = assignments.create(
        db,
        title='HW1',
        subject_code='MATH1',
        instructions='Do problems 1-10',
        teacher_id=seeded.teacher_id,
    )

    assert assignment == {
        'id': assignment['id'],
        'title': 'HW1',
        'subject_code': 'MATH1',
        'instructions': 'Do problems 1-10',
        'teacher_id': seeded.teacher_id,
    }


def test_create_unknown_teacher(db, seeded) -> None:
    with pytest.raises(NotFoundError) as exception_info:
        assignments.create(db, title='HW1', subject_code='MATH1', instructions=None, teacher_id=0)

    assert exception_info.value.message == 'No teacher with id: 0'


def test_create_unknown_subject(db, seeded) -> None:
    with pytest.raises(NotFoundError) as exception_info:
        assignments.create(
            db, title='HW1', subject_code='NOPE', instructions=None, teacher_id=seeded.teacher_id
        )

    assert exception_info.value.message == 'No subject code: NOPE'


def test_get(db, seeded) -> None:
    assignment = assignments.get(db, seeded.assignment_id)

    assert assignment['title'] == 'Assignment1'
    assert assignment['subject_code'] == 'HIST1'


def test_get_unknown(db, seeded) -> None:
    with pytest.raises(NotFoundError) as exception_info:
        assignments.get(db, 0)

    assert exception_info.value.message == 'No assignment: 0'


def test_get_all_for_teacher(db, seeded) -> None:
    assignments.create(db, title='HW1', subject_code='MATH1', instructions=None, teacher_id=seeded.teacher_id)

    result = assignments.get_all_for_teacher(db, 'u4')

    assert [assignment['title'] for assignment in result] == ['Assignment1', 'HW1']


def test_get_all_for_non_teacher(db, seeded) -> None:
    with pytest.raises(NotFoundError) as exception_info:
        assignments.get_all_for_teacher(db, 'u1')

    assert exception_info.value.message == 'No teacher: u1'


def test_update(db, seeded) -> None:
    assignment = assignments.update(db, seeded.assignment_id, {'title': 'Renamed', 'subject_code': 'ART1'})

    assert assignment['title'] == 'Renamed'
    assert assignment['subject_code'] == 'ART1'
    assert assignment['instructions'] == 'Instructions for Assignment 1'


def test_update_unknown_subject(db, seeded) -> None:
    with pytest.raises(NotFoundError):
        assignments.update(db, seeded.assignment_id, {'subject_code': 'NOPE'})

    assert assignments.get(db, seeded.assignment_id)['subject_code'] == 'HIST1'


def test_update_unknown_assignment(db, seeded) -> None:
    with pytest.raises(NotFoundError) as exception_info:
        assignments.update(db, 0, {'title': 'Renamed'})

    assert exception_info.value.message == 'No assignment: 0'


def test_update_without_data(db, seeded) -> None:
    with pytest.raises(BadRequestError):
        assignments.update(db, seeded.assignment_id, {})


def test_delete_cascades_student_assignments(db, seeded) -> None:
    student_assignments.assign(db, assignment_id=seeded.assignment_id, student_id=seeded.student_id, date_due=None)

    assert assignments.delete(db, seeded.assignment_id) == {'deleted': seeded.assignment_id}

    assert db.query(StudentAssignment).count() == 0
    with pytest.raises(NotFoundError):
        assignments.get(db, seeded.assignment_id)


def test_delete_unknown(db, seeded) -> None:
    with pytest.raises(NotFoundError):
        assignments.delete(db, 0)
