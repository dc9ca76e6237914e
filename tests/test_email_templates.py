from datetime import datetime, timezone

import pytest

from app.services.email_templates import (
    EmailTemplate,
    InvalidScoreError,
    announcement_email,
    assignment_graded_email,
    assignment_submitted_email,
    compute_percentage,
    format_timestamp,
    quiz_result_email,
)


class TestComputePercentage:

    def test_rounds_to_one_decimal(self):
        assert compute_percentage(2, 3) == 66.7
        assert compute_percentage(8, 10) == 80.0
        assert compute_percentage(87, 100) == 87.0

    def test_zero_score(self):
        assert compute_percentage(0, 10) == 0.0

    @pytest.mark.parametrize('total', [0, -5, None])
    def test_rejects_non_positive_total(self, total):
        with pytest.raises(InvalidScoreError):
            compute_percentage(5, total)

    def test_invalid_score_is_value_error(self):
        assert issubclass(InvalidScoreError, ValueError)


def test_format_timestamp():
    assert format_timestamp(datetime(2025, 3, 5, 14, 30, tzinfo=timezone.utc)) == 'Mar 05, 2025 02:30 PM UTC'


def test_format_timestamp_assumes_naive_is_utc():
    assert format_timestamp(datetime(2025, 3, 5, 9, 5)) == 'Mar 05, 2025 09:05 AM UTC'


class TestAnnouncementEmail:

    def test_contents(self):
        template = announcement_email('Alice', 'Midterm moved', 'Now on Friday.', 'Math 101', 'Prof. Oak')

        assert isinstance(template, EmailTemplate)
        assert template.subject == '📢 New Announcement: Midterm moved'
        for part in (template.html, template.text):
            assert 'Hi Alice,' in part
            assert 'Midterm moved' in part
            assert 'Now on Friday.' in part
            assert 'Math 101' in part
            assert 'Prof. Oak' in part
        assert template.html.lstrip().startswith('<!DOCTYPE html>')

    def test_html_is_escaped_but_text_is_verbatim(self):
        template = announcement_email('Alice', 'Q&A', 'Bring <notes>', 'Math 101', 'Prof. Oak')

        assert 'Q&amp;A' in template.html
        assert 'Bring &lt;notes&gt;' in template.html
        assert 'Q&A' in template.text
        assert 'Bring <notes>' in template.text
        assert template.subject == '📢 New Announcement: Q&A'


class TestAssignmentSubmittedEmail:

    def test_contents(self):
        template = assignment_submitted_email('Alice', 'Homework 3', 'Math 101', 2, 'Mar 05, 2025 02:30 PM UTC')

        assert template.subject == '✅ Assignment Submitted: Homework 3'
        assert 'Attempt: #2' in template.text
        assert 'Submitted: Mar 05, 2025 02:30 PM UTC' in template.text
        assert '#2' in template.html
        assert 'Math 101' in template.html

    @pytest.mark.parametrize('attempt', [None, 0, -1])
    def test_attempt_defaults_to_one(self, attempt):
        template = assignment_submitted_email('Alice', 'Homework 3', 'Math 101', attempt, 'now')
        assert 'Attempt: #1' in template.text


class TestAssignmentGradedEmail:

    def test_score_and_percentage(self):
        template = assignment_graded_email('Alice', 'Homework 3', 'Math 101', 87, 100)

        assert template.subject == '📊 Assignment Graded: Homework 3 - 87/100'
        assert 'Score: 87/100 (87.0%)' in template.text
        assert '87/100' in template.html
        assert '87.0%' in template.html

    def test_without_feedback_has_no_feedback_section(self):
        template = assignment_graded_email('Alice', 'Homework 3', 'Math 101', 87, 100, None)

        assert 'feedback' not in template.html.lower()
        assert 'feedback' not in template.text.lower()

    def test_blank_feedback_is_omitted(self):
        template = assignment_graded_email('Alice', 'Homework 3', 'Math 101', 87, 100, '   ')

        assert 'feedback' not in template.html.lower()
        assert 'feedback' not in template.text.lower()

    def test_with_feedback_has_one_feedback_section(self):
        template = assignment_graded_email('Alice', 'Homework 3', 'Math 101', 87, 100, 'Good job')

        assert template.html.count('Instructor Feedback') == 1
        assert template.text.count('Instructor Feedback') == 1
        assert 'Good job' in template.html
        assert 'Instructor Feedback: Good job' in template.text

    def test_zero_total_is_rejected(self):
        with pytest.raises(InvalidScoreError):
            assignment_graded_email('Alice', 'Homework 3', 'Math 101', 5, 0)


class TestQuizResultEmail:

    def test_contents(self):
        template = quiz_result_email('Alice', 'Algebra Quiz', 'Math 101', 8, 10, 'Mar 05, 2025 02:30 PM UTC')

        assert template.subject == '✅ Quiz Submitted: Algebra Quiz - 8/10'
        assert 'Score: 8/10 (80.0%)' in template.text
        assert 'Algebra Quiz' in template.html
        assert 'Math 101' in template.html
        assert '80.0%' in template.html
        assert 'Submitted: Mar 05, 2025 02:30 PM UTC' in template.text

    def test_output_never_contains_non_numeric_percentage(self):
        with pytest.raises(InvalidScoreError):
            quiz_result_email('Alice', 'Algebra Quiz', 'Math 101', 0, 0, 'now')


def test_non_string_feedback_is_omitted():
    template = assignment_graded_email('Alice', 'Homework 3', 'Math 101', 9, 10, 5)

    assert 'feedback' not in template.html.lower()
    assert 'feedback' not in template.text.lower()
