"""Tests for review approval aggregation."""

from conftest import make_reviews

from github_merge_bot.merge_queue.approval import decisive_verdicts, is_approved
from github_merge_bot.merge_queue.models import Review, ReviewState


class TestDecisiveVerdicts:
    """Test per-author verdict extraction."""

    def test_last_decisive_review_wins(self):
        """Test that changes requested after an approval is the verdict."""
        reviews = make_reviews((1, "APPROVED"), (1, "CHANGES_REQUESTED"))
        assert decisive_verdicts(reviews) == {1: ReviewState.CHANGES_REQUESTED}

    def test_later_approval_overrides_changes_requested(self):
        """Test that an approval after requested changes is the verdict."""
        reviews = make_reviews((1, "CHANGES_REQUESTED"), (1, "APPROVED"))
        assert decisive_verdicts(reviews) == {1: ReviewState.APPROVED}

    def test_comments_do_not_mask_verdict(self):
        """Test that non-decisive reviews are ignored entirely."""
        reviews = make_reviews((1, "APPROVED"), (1, "COMMENTED"), (1, "DISMISSED"))
        assert decisive_verdicts(reviews) == {1: ReviewState.APPROVED}

    def test_author_without_decisive_review_is_absent(self):
        """Test that comment-only reviewers contribute no verdict."""
        reviews = make_reviews((1, "COMMENTED"), (2, "APPROVED"))
        assert decisive_verdicts(reviews) == {2: ReviewState.APPROVED}

    def test_submission_order_not_list_order(self):
        """Test that reviews are ordered by their submission index."""
        reviews = [
            Review(author_id=1, state=ReviewState.APPROVED, submitted_index=5),
            Review(author_id=1, state=ReviewState.CHANGES_REQUESTED, submitted_index=2),
        ]
        assert decisive_verdicts(reviews) == {1: ReviewState.APPROVED}


class TestIsApproved:
    """Test the approval verdict."""

    def test_no_reviews(self):
        """Test that a pull request without reviews is not approved."""
        assert is_approved([]) is False

    def test_single_approval(self):
        """Test that one approval is enough."""
        assert is_approved(make_reviews((1, "APPROVED"))) is True

    def test_all_authors_approve(self):
        """Test that approvals from several authors approve."""
        reviews = make_reviews((1, "APPROVED"), (2, "COMMENTED"), (3, "APPROVED"))
        assert is_approved(reviews) is True

    def test_any_changes_requested_blocks(self):
        """Test that one author requesting changes blocks other approvals."""
        reviews = make_reviews((1, "APPROVED"), (2, "CHANGES_REQUESTED"), (3, "APPROVED"))
        assert is_approved(reviews) is False

    def test_only_comments(self):
        """Test that comments alone never approve."""
        assert is_approved(make_reviews((1, "COMMENTED"), (2, "PENDING"))) is False

    def test_withdrawn_request_for_changes(self):
        """Test that a reviewer who later approves no longer blocks."""
        reviews = make_reviews((1, "CHANGES_REQUESTED"), (2, "APPROVED"), (1, "APPROVED"))
        assert is_approved(reviews) is True

    def test_changed_mind_after_approval(self):
        """Test that a reviewer who later requests changes blocks."""
        reviews = make_reviews((1, "APPROVED"), (1, "CHANGES_REQUESTED"))
        assert is_approved(reviews) is False

    def test_unknown_state_is_ignored(self):
        """Test that unrecognised API states are treated as non-decisive."""
        reviews = [
            Review(1, ReviewState.parse("APPROVED"), 0),
            Review(1, ReviewState.parse("SOMETHING_NEW"), 1),
        ]
        assert reviews[1].state is ReviewState.UNKNOWN
        assert is_approved(reviews) is True
