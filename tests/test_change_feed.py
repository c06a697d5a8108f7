from slot_engine.infrastructure.messaging.in_memory_change_feed import InMemoryChangeFeed


def test_publish_reaches_only_table_subscribers():
    feed = InMemoryChangeFeed()
    users, games = [], []
    feed.subscribe("users", users.append)
    feed.subscribe("games", games.append)

    feed.publish("users", {"id": "u1"})

    assert users == [{"id": "u1"}]
    assert games == []


def test_failing_subscriber_does_not_block_others():
    feed = InMemoryChangeFeed()
    seen = []

    def broken(change):
        raise RuntimeError("boom")

    feed.subscribe("users", broken)
    feed.subscribe("users", seen.append)
    feed.publish("users", {"id": "u1"})

    assert seen == [{"id": "u1"}]


def test_unsubscribe():
    feed = InMemoryChangeFeed()
    seen = []
    unsubscribe = feed.subscribe("users", seen.append)
    unsubscribe()
    unsubscribe()
    feed.publish("users", {"id": "u1"})
    assert seen == []
