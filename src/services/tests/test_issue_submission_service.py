"""Unit tests for issue_submission_service module."""

import unittest
from unittest.mock import MagicMock
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from services.issue_submission_service import (
    prepare_issue,
    submit_issue,
    _create_issue,
)
from adapter.fake.issue_tracker import FakeIssueTracker
from domain.model.errors import (
    IssueCreationError,
    UnknownTemplateError,
    ValidationError,
)
from domain.model.issue import CreatedIssue, IssueDraft


FEATURE_FIELDS = {
    'descripcion': '  Export roadmap as CSV  ',
    'criterio': 'CSV downloads from the page',
}


class TestPrepareIssue(unittest.TestCase):
    """Test prepare_issue function."""

    def test_prepare_issue_builds_draft(self):
        draft = prepare_issue('feature', '  [FEAT] CSV export ', FEATURE_FIELDS)

        self.assertEqual(draft.template_id, 'feature')
        self.assertEqual(draft.title, '[FEAT] CSV export')
        self.assertEqual(draft.labels, ('Tipo: Feature', 'Status: Ideas'))
        self.assertIn('### Descripción\nExport roadmap as CSV', draft.body)

    def test_prepare_issue_requires_title(self):
        with self.assertRaises(ValidationError) as context:
            prepare_issue('feature', '   ', FEATURE_FIELDS)
        self.assertEqual(str(context.exception), 'Title is required')

    def test_prepare_issue_rejects_unknown_template(self):
        with self.assertRaises(UnknownTemplateError):
            prepare_issue('roadmap', 'Title', {})

    def test_prepare_issue_handles_missing_fields(self):
        draft = prepare_issue('blank', 'Just an idea', None)
        self.assertEqual(draft.body, '')


class TestSubmitIssue(unittest.TestCase):
    """Test submit_issue function."""

    def setUp(self):
        self.tracker = FakeIssueTracker()

    def test_submit_issue_success(self):
        result = submit_issue('feature', 'CSV export', FEATURE_FIELDS, self.tracker)

        self.assertTrue(result.linked_to_project)
        self.assertEqual(result.issue.number, 1)
        self.assertEqual(result.issue.html_url, 'https://github.com/example/roadmap/issues/1')
        self.assertEqual(self.tracker.project_items, ['I_fake1'])

    def test_submit_issue_sends_template_labels_and_body(self):
        submit_issue('feature', 'CSV export', FEATURE_FIELDS, self.tracker)

        filed = self.tracker.issues[0]
        self.assertEqual(filed['title'], 'CSV export')
        self.assertEqual(filed['labels'], ['Tipo: Feature', 'Status: Ideas'])
        self.assertTrue(filed['body'].startswith('### Descripción'))

    def test_submit_issue_validation_error_creates_nothing(self):
        with self.assertRaises(ValidationError):
            submit_issue('feature', 'CSV export', {'descripcion': 'only this'}, self.tracker)

        self.assertEqual(self.tracker.issues, [])

    def test_submit_issue_raises_when_creation_fails(self):
        tracker = FakeIssueTracker(fail_create=True)

        with self.assertRaises(IssueCreationError):
            submit_issue('feature', 'CSV export', FEATURE_FIELDS, tracker)

        self.assertEqual(tracker.project_items, [])

    def test_submit_issue_reports_project_failure_as_partial_success(self):
        tracker = FakeIssueTracker(fail_project=True)

        result = submit_issue('feature', 'CSV export', FEATURE_FIELDS, tracker)

        self.assertFalse(result.linked_to_project)
        self.assertIn('#1', result.project_error)
        self.assertEqual(result.issue.html_url, 'https://github.com/example/roadmap/issues/1')

    def test_submit_issue_rejects_response_without_node_id(self):
        tracker = FakeIssueTracker(omit_node_id=True)

        with self.assertRaises(IssueCreationError) as context:
            submit_issue('feature', 'CSV export', FEATURE_FIELDS, tracker)

        self.assertIn('node_id', str(context.exception))
        self.assertEqual(tracker.project_items, [])


class TestCreateIssue(unittest.TestCase):
    """Test _create_issue helper."""

    def setUp(self):
        self.draft = IssueDraft(template_id='blank', title='t', labels=('x',), body='')

    def test_unexpected_tracker_errors_are_wrapped(self):
        tracker = MagicMock()
        tracker.create_issue.side_effect = ConnectionError('network down')

        with self.assertRaises(IssueCreationError) as context:
            _create_issue(tracker, self.draft)

        self.assertIsInstance(context.exception.__cause__, ConnectionError)

    def test_returns_created_issue(self):
        tracker = MagicMock()
        tracker.create_issue.return_value = CreatedIssue(number=7, html_url='u', node_id='N')

        issue = _create_issue(tracker, self.draft)

        self.assertEqual(issue.number, 7)
        tracker.create_issue.assert_called_once_with('t', ('x',), '')


if __name__ == '__main__':
    unittest.main()
