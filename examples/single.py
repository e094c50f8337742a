import sys

from gufo.pinger import Ping, Resolver


def main(addr: str) -> None:
    target = Resolver().resolve(addr)
    print(Ping().send(str(target)))


if __name__ == "__main__":
    main(sys.argv[1])
