import threading

from lambdas.owlbot.memory import STATE_DIRECTIONS, STATE_MENU, Session, SessionStore


def test_get_creates_default_session():
    store = SessionStore()
    sess = store.get("u1")
    assert sess.user_id == "u1"
    assert sess.state == STATE_MENU
    assert sess.clarifying is False
    assert sess.shown == {}
    assert "u1" in store


def test_get_returns_same_session():
    store = SessionStore()
    assert store.get("u1") is store.get("u1")
    assert len(store) == 1


def test_mutations_apply_in_place():
    store = SessionStore()
    sess = store.get("u1")
    store.set_state("u1", STATE_DIRECTIONS)
    store.set_clarifying("u1", True)
    store.record_shown("u1", "facts", 3)
    store.record_shown("u1", "facts", 5)
    assert sess.state == STATE_DIRECTIONS
    assert sess.clarifying is True
    assert sess.shown["facts"] == {3, 5}
    store.reset_pool("u1", "facts")
    assert sess.shown["facts"] == set()


def test_mutating_unknown_user_materializes_session():
    store = SessionStore()
    store.record_shown("ghost", "explorationSpots", 1)
    assert store.get("ghost").shown["explorationSpots"] == {1}
    assert store.get("ghost").state == STATE_MENU


def test_sessions_are_isolated_per_user():
    store = SessionStore()
    store.set_state("a", STATE_DIRECTIONS)
    store.record_shown("a", "facts", 0)
    assert store.get("b").state == STATE_MENU
    assert store.get("b").shown_in("facts") == set()


def test_new_store_behaves_like_first_contact():
    # A process restart drops every session
    before = SessionStore()
    before.set_state("u1", STATE_DIRECTIONS)
    before.set_clarifying("u1", True)
    after = SessionStore()
    sess = after.get("u1")
    assert (sess.state, sess.clarifying, sess.shown) == (STATE_MENU, False, {})


def test_lock_per_user():
    store = SessionStore()
    assert store.lock_for("a") is store.lock_for("a")
    assert store.lock_for("a") is not store.lock_for("b")


def test_lock_for_session_seen_mid_creation():
    # Another thread can already see the session before its lock is registered
    store = SessionStore()
    store._sessions["u"] = Session("u")
    lock = store.lock_for("u")
    assert lock is store.lock_for("u")
    with lock:
        assert store.get("u").user_id == "u"


def test_concurrent_first_contact_shares_one_lock():
    store = SessionStore()
    barrier = threading.Barrier(8)
    locks = []

    def first_turn():
        barrier.wait()
        locks.append(store.lock_for("new-user"))

    threads = [threading.Thread(target=first_turn) for _ in range(8)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()
    assert len(locks) == 8
    assert all(lock is locks[0] for lock in locks)
    assert len(store) == 1
