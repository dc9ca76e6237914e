from app import create_app
from app import firestore_dao as dao
from app.firestore_models import Announcement, Assignment, Course, Notification, Quiz, User


def seed_database():
    """Populate Firestore (normally the emulator) with one course worth of
    documents plus a notification of every type.

    Creating the notifications fires the onCreate trigger when the functions
    emulator is running, so each one should produce an email (or a dry-run
    log line).
    """
    app = create_app()
    with app.app_context():
        print("Creating users...")
        instructor_uid = 'instructor1'
        dao.create_user(instructor_uid, User(
            email='instructor1@example.com',
            display_name='Dr. Kim',
        ).to_dict())

        student_uids = []
        for i in range(1, 4):
            uid = f'student{i}'
            dao.create_user(uid, User(
                email=f'student{i}@example.com',
                display_name=f'Student {i}',
            ).to_dict())
            student_uids.append(uid)

        # A student without an email address; notifications to them are skipped
        dao.create_user('student-noemail', User(display_name='No Email').to_dict())

        print("Creating course...")
        course_id = dao.create_course(Course(name='Math 101').to_dict())

        print("Creating announcement, assignment and quiz...")
        announcement_id = dao.create_announcement(Announcement(
            title='Midterm moved to Friday',
            content='The midterm exam will take place on Friday in room 204.',
            course_id=course_id,
            created_by=instructor_uid,
        ).to_dict())
        assignment_id = dao.create_assignment(Assignment(
            title='Homework 3: Linear Equations',
            course_id=course_id,
        ).to_dict())
        quiz_id = dao.create_quiz(Quiz(title='Algebra Quiz', course_id=course_id).to_dict())

        print("Creating notifications...")
        for uid in student_uids + ['student-noemail']:
            dao.create_notification(Notification(
                user_id=uid,
                type='announcement',
                related_id=announcement_id,
                message='New announcement: Midterm moved to Friday',
            ).to_dict())

        first = student_uids[0]
        dao.create_notification(Notification(
            user_id=first,
            type='assignmentSubmitted',
            related_id=assignment_id,
            message='Homework 3 submitted. Attempt #2',
        ).to_dict())
        dao.create_notification(Notification(
            user_id=first,
            type='assignmentGraded',
            related_id=assignment_id,
            message='Homework 3 graded. Score: 87/100',
            feedback='Nice work on the word problems.',
        ).to_dict())
        dao.create_notification(Notification(
            user_id=first,
            type='quizSubmitted',
            related_id=quiz_id,
            message='Algebra Quiz completed. Score: 8/10',
        ).to_dict())
        dao.create_notification(Notification(
            user_id=first,
            type='courseInvite',
            related_id=course_id,
            message='You were invited to Math 101',
        ).to_dict())

        print("Seeding complete.")


if __name__ == '__main__':
    seed_database()
