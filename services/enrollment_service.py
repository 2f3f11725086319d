"""
Enrollment Service for BiLearnHub
Adds courses to a student's enrolled list with a fresh progress record
"""

import logging

from services.documents import build_progress_record
from services.profile_repository import STUDENT_PROFILES, field_path
from utils.auth_middleware import require_principal
from utils.error_handler import AlreadyExistsError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

MAX_COURSE_ID_LENGTH = 128


def validate_course_id(course_id):
    if course_id is None:
        raise ValidationError('Course ID is required', field='courseId')
    if not isinstance(course_id, str):
        raise ValidationError('Course ID must be a string', field='courseId')

    course_id = course_id.strip()
    if not course_id:
        raise ValidationError('Course ID is required', field='courseId')
    if len(course_id) > MAX_COURSE_ID_LENGTH:
        raise ValidationError(
            f'Course ID must be at most {MAX_COURSE_ID_LENGTH} characters', field='courseId'
        )
    return course_id


class EnrollmentService:
    def __init__(self, repository):
        self.repository = repository

    def enroll_in_course(self, principal, course_id):
        """
        Enroll the caller in a course.

        The membership check and the write run in one transaction, so two
        concurrent enrollments for the same student cannot overwrite each other.
        """
        require_principal(principal)
        uid = principal['uid']
        course_id = validate_course_id(course_id)

        def add_course(profile):
            if profile is None:
                raise NotFoundError('Student profile not found')

            enrolled_courses = list(profile.get('enrolledCourses') or [])
            if course_id in enrolled_courses:
                raise AlreadyExistsError('Already enrolled in this course')

            now = self.repository.now()
            return {
                'enrolledCourses': enrolled_courses + [course_id],
                field_path('progress', course_id): build_progress_record(now),
                'updatedAt': now
            }

        self.repository.update_in_transaction(STUDENT_PROFILES, uid, add_course)

        logger.info(f"Enrolled {uid} in course: {course_id}")
        return {'success': True, 'message': 'Successfully enrolled in course'}
