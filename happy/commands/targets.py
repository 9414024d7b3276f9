from typing import Iterable, TextIO


def read_hostnames(lines: Iterable[str]) -> list[str]:
    hostnames: list[str] = []

    for line in lines:
        hostname = line.strip()
        if hostname:
            hostnames.append(hostname)

    return hostnames


def load_hostnames(files: Iterable[TextIO]) -> list[str]:
    hostnames: list[str] = []

    for target_file in files:
        hostnames.extend(read_hostnames(target_file))

    return hostnames
