from vibematch.matching import PresenceService


def test_unknown_user_is_offline(store, clock) -> None:
    service = PresenceService(store, clock=clock)

    state = service.get_presence("u1")

    assert state.user_id == "u1"
    assert state.is_online is False
    assert state.last_seen is None
    assert service.is_typing("u1") is False


def test_online_writes_are_rate_limited_per_user(store, clock) -> None:
    service = PresenceService(store, min_interval=5, clock=clock)

    assert service.update_online_status("u1", True) is True
    first_seen = service.get_presence("u1").last_seen

    clock.advance(2)
    assert service.update_online_status("u1", True) is False
    assert service.get_presence("u1").last_seen == first_seen

    # Another user is not affected by u1's limit.
    assert service.update_online_status("u2", True) is True

    clock.advance(3)
    assert service.update_online_status("u1", True) is True
    assert service.get_presence("u1").last_seen == clock.now


def test_going_offline_is_never_rate_limited(store, clock) -> None:
    service = PresenceService(store, min_interval=5, clock=clock)
    service.update_online_status("u1", True)
    service.set_typing("u1", "m1", True)

    clock.advance(1)
    assert service.update_online_status("u1", False) is True

    state = service.get_presence("u1")
    assert state.is_online is False
    assert state.last_seen == clock.now
    assert state.typing_in is None


def test_typing_flag_expires_without_a_timer(store, clock) -> None:
    service = PresenceService(store, typing_ttl=3, clock=clock)

    service.set_typing("u1", "m1", True)
    assert service.is_typing("u1") is True
    assert service.is_typing("u1", "m1") is True
    assert service.is_typing("u1", "m2") is False

    clock.advance(2.9)
    assert service.is_typing("u1", "m1") is True

    clock.advance(0.1)
    assert service.is_typing("u1", "m1") is False
    assert service.get_presence("u1").typing_until is None


def test_clearing_typing_only_affects_the_same_conversation(store, clock) -> None:
    service = PresenceService(store, clock=clock)

    service.set_typing("u1", "m1", True)
    service.set_typing("u1", "m2", False)
    assert service.is_typing("u1", "m1") is True

    service.set_typing("u1", "m1", False)
    assert service.is_typing("u1") is False
