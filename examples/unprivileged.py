import sys

from gufo.pinger import Ping

# Requires net.ipv4.ping_group_range to include the current group
if __name__ == "__main__":
    print(Ping(privileged=False).send(sys.argv[1]))
