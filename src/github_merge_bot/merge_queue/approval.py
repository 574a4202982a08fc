"""Review approval aggregation."""

from collections.abc import Iterable

from .models import Review, ReviewState


def decisive_verdicts(reviews: Iterable[Review]) -> dict[int | None, ReviewState]:
    """Return each reviewer's last decisive review state.

    Reviews that neither approve nor request changes are skipped, so a later
    comment never masks an earlier approval.

    Parameters
    ----------
    reviews : Iterable[Review]
        Reviews of one pull request, in any order.

    Returns
    -------
    dict[int or None, ReviewState]
        Author id to ``APPROVED`` or ``CHANGES_REQUESTED``. Authors without
        a decisive review are absent.

    """
    verdicts: dict[int | None, ReviewState] = {}
    for review in sorted(reviews, key=lambda r: r.submitted_index):
        if review.state.is_decisive:
            verdicts[review.author_id] = review.state
    return verdicts


def is_approved(reviews: Iterable[Review]) -> bool:
    """Check whether reviews add up to an approval.

    Parameters
    ----------
    reviews : Iterable[Review]
        Reviews of one pull request.

    Returns
    -------
    bool
        True if at least one reviewer approves and nobody requests changes.

    """
    verdicts = decisive_verdicts(reviews).values()
    return ReviewState.APPROVED in verdicts and (
        ReviewState.CHANGES_REQUESTED not in verdicts
    )
