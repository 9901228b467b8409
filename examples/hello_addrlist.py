import time

import addrlist
from addrlist import IndexMismatchError, random_address


def main() -> None:
    members = [random_address() for _ in range(3)]
    lst = addrlist.run(port=57794, initial=members)
    client = lst.as_client() if isinstance(lst, addrlist.AddrListServer) else lst

    newcomer = random_address()
    client.insert(newcomer)
    print("after insert:", client.get_addresses())

    # A stale predecessor is rejected; re-read and retry.
    addresses = client.get_addresses()
    try:
        client.remove(addresses[0], addresses[2])
    except IndexMismatchError as e:
        print("rejected:", e.message)
        client.remove_item(addresses[2])
    print("after remove:", client.get_addresses())

    client.swap_item(newcomer, random_address())
    print("after swap:", client.get_addresses(), "count:", client.count())

    try:
        while True:
            time.sleep(3600)
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
