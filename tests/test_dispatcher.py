import threading

from core.dispatcher import UiDispatcher


def test_drain_runs_callbacks_fifo():
    dispatcher = UiDispatcher()
    seen = []
    for i in range(5):
        dispatcher.post(lambda i=i: seen.append(i))

    assert dispatcher.drain() == 5
    assert seen == [0, 1, 2, 3, 4]
    assert dispatcher.pending() == 0


def test_drain_respects_max_items():
    dispatcher = UiDispatcher()
    seen = []
    for i in range(3):
        dispatcher.post(lambda i=i: seen.append(i))

    assert dispatcher.drain(max_items=2) == 2
    assert seen == [0, 1]
    assert dispatcher.pending() == 1


def test_failing_callback_does_not_stop_the_pump(caplog):
    dispatcher = UiDispatcher()
    seen = []

    def broken():
        raise RuntimeError("callback exploded")

    dispatcher.post(broken)
    dispatcher.post(lambda: seen.append("after"))
    dispatcher.drain()

    assert seen == ["after"]
    assert "UI callback failed" in caplog.text


def test_posts_from_worker_threads_run_on_draining_thread():
    dispatcher = UiDispatcher()
    ran_on = []

    worker = threading.Thread(
        target=lambda: dispatcher.post(lambda: ran_on.append(threading.current_thread()))
    )
    worker.start()
    worker.join()
    dispatcher.drain()

    assert ran_on == [threading.current_thread()]


def test_close_drops_pending_and_rejects_new_posts():
    dispatcher = UiDispatcher()
    seen = []
    dispatcher.post(lambda: seen.append(1))

    dispatcher.close()

    assert dispatcher.closed
    assert dispatcher.post(lambda: seen.append(2)) is False
    assert dispatcher.drain() == 0
    assert seen == []
