from __future__ import annotations

import threading

from action_audit.core.messages import AuditMessages


def _generation(n: int) -> dict:
    return {"manage": {"accounts": {"create": f"create-{n}", "destroy": f"destroy-{n}"}}}


def test_readers_never_observe_a_partial_tree_during_reload() -> None:
    messages = AuditMessages()
    messages.load(_generation(0))

    stop = threading.Event()
    problems: list[str] = []

    def reader() -> None:
        while not stop.is_set():
            snapshot = messages.to_dict()
            accounts = snapshot.get("manage", {}).get("accounts", {})
            create, destroy = accounts.get("create"), accounts.get("destroy")
            if create is None or destroy is None:
                problems.append(f"incomplete tree: {snapshot!r}")
            elif create.split("-")[1] != destroy.split("-")[1]:
                problems.append(f"mixed generations: {create} / {destroy}")

    threads = [threading.Thread(target=reader) for _ in range(4)]
    for t in threads:
        t.start()
    try:
        for n in range(1, 200):
            messages.replace_all([_generation(n)])
    finally:
        stop.set()
        for t in threads:
            t.join()

    assert problems == []
    assert messages.lookup("manage/accounts", "create") == "create-199"


def test_concurrent_writers_do_not_lose_entries() -> None:
    messages = AuditMessages()

    def writer(prefix: str) -> None:
        for i in range(100):
            messages.add_message(f"{prefix}/items", f"k{i}", f"{prefix}-{i}")

    threads = [threading.Thread(target=writer, args=(f"w{n}",)) for n in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(messages) == 400
    assert messages.lookup("w3/items", "k99") == "w3-99"
