from __future__ import annotations


def test_run_auto_attaches_to_existing_server() -> None:
    """If a server is reachable at host/port, addrlist.run() should attach by default.

    Scripts can then write `lst = addrlist.run(port=...)` and share one list.
    """

    import addrlist

    # Start a server first on an explicit port.
    server = addrlist.run(host="127.0.0.1", port=0, new_server=True, log_level="warning")

    # Now call run() again pointing at the same host/port.
    attached = addrlist.run(host=server.host, port=server.port, log_level="warning")

    # Attached instance should be a client (not a second server).
    from addrlist.sdk.client import AddrListClient

    assert isinstance(attached, AddrListClient)
    assert attached.base_url.rstrip("/") == f"http://{server.host}:{server.port}"


def test_attached_client_operates_on_the_served_list() -> None:
    import addrlist
    from addrlist.core.addresses import random_address

    first, second = random_address(), random_address()
    server = addrlist.run(initial=[first], new_server=True, log_level="warning")
    client = server.as_client()

    client.insert(second)

    assert server.get_addresses() == [second, first]
    assert client.count() == 2
    assert client.predecessor_of(first) == second


def test_run_new_server_forces_start_even_if_env_url_is_set(monkeypatch) -> None:
    import addrlist

    # Start a server and point ADDRLIST_URL at it.
    s1 = addrlist.run(host="127.0.0.1", port=0, new_server=True, log_level="warning")

    monkeypatch.setenv("ADDRLIST_URL", f"http://{s1.host}:{s1.port}")

    # new_server=True should ignore ADDRLIST_URL and start a fresh server.
    s2 = addrlist.run(host="127.0.0.1", port=0, new_server=True, log_level="warning")

    from addrlist.runtime.server import AddrListServer

    assert isinstance(s2, AddrListServer)
    assert (s2.host, s2.port) != (s1.host, s1.port)
    assert s2.registry is not s1.registry


def test_run_attaches_through_env_url(monkeypatch) -> None:
    import addrlist
    from addrlist.core.addresses import random_address
    from addrlist.sdk.client import AddrListClient

    member = random_address()
    server = addrlist.run(initial=[member], new_server=True, log_level="warning")
    monkeypatch.setenv("ADDRLIST_URL", f"{server.host}:{server.port}")

    attached = addrlist.run(log_level="warning")

    assert isinstance(attached, AddrListClient)
    assert attached.base_url == f"http://{server.host}:{server.port}"
    assert attached.get_addresses() == [member]


def test_attach_warns_about_ignored_list_arguments(monkeypatch, caplog) -> None:
    import logging

    import addrlist
    from addrlist.core.addresses import random_address
    from addrlist.sdk.client import AddrListClient

    server = addrlist.run(new_server=True, log_level="warning")
    monkeypatch.setenv("ADDRLIST_URL", f"http://{server.host}:{server.port}")

    with caplog.at_level(logging.WARNING, logger="addrlist.runtime.server"):
        attached = addrlist.run(initial=[random_address()], log_level="warning")

    assert isinstance(attached, AddrListClient)
    assert attached.count() == 0
    assert any("ignoring" in r.getMessage() for r in caplog.records)


def test_run_rejects_registry_combined_with_initial() -> None:
    import pytest

    import addrlist
    from addrlist.core.addresses import random_address
    from addrlist.core.registry import LinkedAddressList

    with pytest.raises(ValueError, match="registry cannot be combined"):
        addrlist.run(registry=LinkedAddressList(), initial=[random_address()], new_server=True)
    with pytest.raises(ValueError, match="registry cannot be combined"):
        addrlist.run(registry=LinkedAddressList(), self_address=random_address(), new_server=True)
