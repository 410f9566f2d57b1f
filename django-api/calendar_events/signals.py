"""Django signals for cache invalidation."""

import logging

from django.core.cache import cache
from django.db import transaction
from django.db.models.signals import post_delete, post_save
from django.dispatch import receiver

from calendar_events.models import Event

logger = logging.getLogger(__name__)

EVENTS_LIST_CACHE_KEY = "events:list"


def clear_list_cache() -> None:
    cache.delete(EVENTS_LIST_CACHE_KEY)


@receiver([post_save, post_delete], sender=Event)
def invalidate_event_cache(sender, instance, **kwargs):
    """Invalidate the list cache when an event is saved or deleted.

    The key is cleared straight away and again once the surrounding
    transaction commits, so a list read made while a batch is still open
    cannot leave the pre-commit rows cached.
    """
    clear_list_cache()
    transaction.on_commit(clear_list_cache)
    logger.debug("Invalidated %s after change to event %s", EVENTS_LIST_CACHE_KEY, instance.pk)
