# tests/test_storage.py

import pytest
from ginywow.models import NewsletterSubscription
from ginywow.schemas import (
    InsertThumbnail, InsertTitleOptimization, InsertNewsletterSubscription, InsertShortUrl,
    SchemaValidationError
)
from ginywow.services import storage
from ginywow.services.storage import StorageError, NotFoundError, AlreadySubscribedError
from ginywow.services.ai_service import get_mock_title_suggestions


def make_thumbnail():
    return storage.create_thumbnail(InsertThumbnail('aGVsbG8=', 'thumb.png', 1024))


def make_short_url(code='abc123', url_type='video'):
    return storage.create_short_url(InsertShortUrl(
        short_code=code,
        original_url='https://www.youtube.com/watch?v=dQw4w9WgXcQ',
        ios_deep_link='youtube://watch?v=dQw4w9WgXcQ',
        android_deep_link='intent://www.youtube.com/watch?v=dQw4w9WgXcQ#Intent;end',
        url_type=url_type,
    ))


class TestThumbnails:

    def test_create_assigns_id_and_timestamp(self, app):
        thumbnail = make_thumbnail()
        assert len(thumbnail.id) == 36
        assert thumbnail.created_at is not None
        assert thumbnail.enhanced_image_data is None
        assert storage.get_thumbnail(thumbnail.id).file_name == 'thumb.png'

    def test_ids_are_unique(self, app):
        assert make_thumbnail().id != make_thumbnail().id

    def test_get_unknown_returns_none(self, app):
        assert storage.get_thumbnail('does-not-exist') is None

    def test_enhancement_is_applied_once(self, app):
        thumbnail = make_thumbnail()
        metrics = {'contrast': 15, 'saturation': 10, 'clarity': 20, 'ctrImprovement': 25}

        enhanced = storage.apply_enhancement(thumbnail.id, 'ZW5oYW5jZWQ=', metrics)
        assert enhanced.enhanced_image_data == 'ZW5oYW5jZWQ='
        assert enhanced.enhancement_metrics == metrics
        assert enhanced.is_enhanced

        with pytest.raises(StorageError, match='already been enhanced'):
            storage.apply_enhancement(thumbnail.id, 'b3RoZXI=', metrics)
        assert storage.get_thumbnail(thumbnail.id).enhanced_image_data == 'ZW5oYW5jZWQ='

    def test_enhancing_unknown_thumbnail(self, app):
        with pytest.raises(NotFoundError):
            storage.apply_enhancement('missing', 'ZW5oYW5jZWQ=', {})


class TestTitleOptimizations:

    def test_create_without_thumbnail(self, app):
        optimization = storage.create_title_optimization(InsertTitleOptimization('My Video'))
        assert optimization.thumbnail_id is None
        assert optimization.optimized_titles is None
        assert optimization.to_dict()['optimizedTitles'] == []

    def test_create_for_unknown_thumbnail(self, app):
        with pytest.raises(NotFoundError):
            storage.create_title_optimization(InsertTitleOptimization('My Video', 'missing'))

    def test_list_by_thumbnail(self, app):
        thumbnail = make_thumbnail()
        first = storage.create_title_optimization(InsertTitleOptimization('First', thumbnail.id))
        second = storage.create_title_optimization(InsertTitleOptimization('Second', thumbnail.id))
        storage.create_title_optimization(InsertTitleOptimization('Unrelated'))

        ids = {o.id for o in storage.get_title_optimizations_by_thumbnail(thumbnail.id)}
        assert ids == {first.id, second.id}
        assert storage.get_title_optimizations_by_thumbnail('missing') == []

    def test_set_optimized_titles_once(self, app):
        optimization = storage.create_title_optimization(InsertTitleOptimization('My Video'))
        suggestions = get_mock_title_suggestions('My Video')

        scored = storage.set_optimized_titles(optimization.id, suggestions)
        assert len(scored.optimized_titles) == 5
        assert scored.optimized_titles[0]['estimatedCtr'] == 35

        with pytest.raises(StorageError, match='already been scored'):
            storage.set_optimized_titles(optimization.id, suggestions)

    def test_set_optimized_titles_rejects_empty_list(self, app):
        optimization = storage.create_title_optimization(InsertTitleOptimization('My Video'))
        with pytest.raises(SchemaValidationError):
            storage.set_optimized_titles(optimization.id, [])

    def test_set_optimized_titles_for_unknown_row(self, app):
        with pytest.raises(NotFoundError):
            storage.set_optimized_titles('missing', get_mock_title_suggestions('x'))


class TestNewsletter:

    def test_new_subscription_defaults(self, app):
        subscription = storage.create_newsletter_subscription(InsertNewsletterSubscription('a@b.com'))
        assert subscription.is_active == 'true'
        assert subscription.source == 'website'
        assert subscription.subscription_date is not None
        assert subscription.last_updated is not None

    def test_lookup_is_case_insensitive(self, app):
        storage.create_newsletter_subscription(InsertNewsletterSubscription('a@b.com'))
        assert storage.get_newsletter_subscription('A@B.COM') is not None

    def test_duplicate_active_subscription_is_rejected(self, app):
        storage.create_newsletter_subscription(InsertNewsletterSubscription('a@b.com'))
        with pytest.raises(AlreadySubscribedError):
            storage.create_newsletter_subscription(InsertNewsletterSubscription('a@b.com'))
        assert NewsletterSubscription.query.count() == 1

    def test_unsubscribe_then_resubscribe(self, app):
        storage.create_newsletter_subscription(InsertNewsletterSubscription('a@b.com'))

        unsubscribed = storage.unsubscribe('a@b.com')
        assert unsubscribed.is_active == 'false'
        assert not unsubscribed.active

        reactivated = storage.create_newsletter_subscription(InsertNewsletterSubscription('a@b.com', 'footer'))
        assert reactivated.id == unsubscribed.id
        assert reactivated.is_active == 'true'
        assert reactivated.source == 'footer'
        assert NewsletterSubscription.query.count() == 1

    def test_unsubscribe_unknown_address(self, app):
        with pytest.raises(NotFoundError):
            storage.unsubscribe('nobody@example.com')


class TestShortUrls:

    def test_create_and_lookup(self, app):
        make_short_url()
        short_url = storage.get_short_url('abc123')
        assert short_url.click_count == 0
        assert short_url.url_type == 'video'
        assert storage.get_short_url('zzz999') is None

    def test_duplicate_code_is_rejected(self, app):
        make_short_url()
        with pytest.raises(StorageError, match='already in use'):
            make_short_url()

    def test_click_count_increments(self, app):
        make_short_url()
        assert storage.increment_click_count('abc123')
        assert storage.increment_click_count('abc123')
        assert storage.get_short_url('abc123').click_count == 2

    def test_click_count_for_unknown_code(self, app):
        assert storage.increment_click_count('missing') is False

    def test_generated_codes_are_short_and_alphanumeric(self, app):
        code = storage.generate_unique_short_code()
        assert len(code) == 6
        assert code.isalnum() and code == code.lower()

    def test_generation_gives_up_after_collisions(self, app, monkeypatch):
        make_short_url('aaaaaa')
        monkeypatch.setattr(storage.secrets, 'choice', lambda alphabet: 'a')
        with pytest.raises(StorageError, match='Unable to generate'):
            storage.generate_unique_short_code()
