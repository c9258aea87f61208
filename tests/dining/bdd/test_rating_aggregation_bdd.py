"""BDD tests for keeping restaurant ratings in step with reviews."""

from dining.exceptions import DiningError, DuplicateReviewError
from dining.review import ledger
from pytest_bdd import given, parsers, scenarios, then, when

scenarios("features/rating_aggregation.feature")


def _write(restaurant_id, user_id, rating, reviews, error):
    try:
        review = ledger.create_review(
            user_id=user_id,
            restaurant_id=restaurant_id,
            rating=rating,
            comment=f"{user_id} had a {rating}-star evening.",
        )
        reviews[user_id] = review.id
    except DiningError as exc:
        error["exc"] = exc


@given(parsers.cfparse('"{user_id}" reviewed the restaurant with {rating:d} stars'))
def user_reviewed(restaurant_id, user_id, rating, reviews, error):
    _write(restaurant_id, user_id, rating, reviews, error)
    assert error["exc"] is None


@when(parsers.cfparse('"{user_id}" reviews the restaurant with {rating:d} stars'))
def user_reviews(restaurant_id, user_id, rating, reviews, error):
    _write(restaurant_id, user_id, rating, reviews, error)


@when(parsers.cfparse('"{user_id}" changes the rating to {rating:d} stars'))
def user_changes_rating(user_id, rating, reviews):
    ledger.update_review(reviews[user_id], user_id, rating=rating)


@when(parsers.cfparse('"{user_id}" rewrites the comment'))
def user_rewrites_comment(user_id, reviews):
    ledger.update_review(reviews[user_id], user_id, comment="On reflection, the dessert was the highlight.")


@when(parsers.cfparse('"{user_id}" deletes the review'))
def user_deletes_review(user_id, reviews):
    ledger.delete_review(reviews[user_id], user_id)


@then("the review is rejected as a duplicate")
def rejected_as_duplicate(error):
    assert isinstance(error["exc"], DuplicateReviewError)
