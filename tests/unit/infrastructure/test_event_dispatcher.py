from unittest.mock import MagicMock

from memoproxy.domain.events.cache_events import CacheHit, CacheMiss, DomainEvent
from memoproxy.domain.models.common import CacheKey
from memoproxy.infrastructure.monitoring.event_dispatcher import EventDispatcher, EventRecorder

KEY = CacheKey("payment", (("amount", 50.0),))

def test_handlers_receive_only_their_event_type():
    dispatcher = EventDispatcher()
    hits, misses = MagicMock(), MagicMock()
    dispatcher.subscribe(CacheHit, hits)
    dispatcher.subscribe(CacheMiss, misses)

    event = CacheHit(proxy="payments", key=KEY)
    dispatcher.publish(event)

    hits.assert_called_once_with(event)
    misses.assert_not_called()

def test_base_type_subscription_receives_everything():
    dispatcher = EventDispatcher()
    recorder = EventRecorder()
    dispatcher.subscribe(DomainEvent, recorder)

    dispatcher.publish(CacheMiss(proxy="payments", key=KEY))
    dispatcher.publish(CacheHit(proxy="payments", key=KEY))

    assert [type(e) for e in recorder.events] == [CacheMiss, CacheHit]
    assert len(recorder.of_type(CacheHit)) == 1

def test_failing_handler_does_not_stop_others():
    dispatcher = EventDispatcher()
    broken = MagicMock(side_effect=RuntimeError("handler bug"))
    healthy = MagicMock()
    dispatcher.subscribe(CacheHit, broken)
    dispatcher.subscribe(CacheHit, healthy)

    dispatcher.publish(CacheHit(proxy="payments", key=KEY))

    healthy.assert_called_once()

def test_unsubscribe():
    dispatcher = EventDispatcher()
    handler = MagicMock()
    dispatcher.subscribe(CacheHit, handler)
    dispatcher.unsubscribe(CacheHit, handler)

    dispatcher.publish(CacheHit(proxy="payments", key=KEY))

    handler.assert_not_called()
