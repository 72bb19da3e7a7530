"""Pytest bootstrap: put the repo root on sys.path and share wg output fixtures."""

import os
import sys

import pytest

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

# `wg show all dump` for two interfaces with one peer each
DUMP_OUTPUT = (
    "home\tGHuwUsaYqAyeNWDMbSJvwuq1AwvkN2Ye9LdGgqxwmOg=\t"
    "p3p3Uzj50FS7sdrTEviJwlsFaUu1TUdBsp+VZUdzm1I=\t12345\t0xca6c\n"
    "home\tJO2If0/wZ8ajoiUSU501u6uNtDZYSIYiz/xtazIMDi0=\t(none)\t"
    "198.51.100.1:54321\t192.168.2.0/24, 192.168.1.0/24\t1600000021\t76697\t100485\toff\n"
    "remote\tUCgwM9mX3HOh8zaL1XXsOLTVnp2QhFjxqVBd2R3ouGQ=\t"
    "dwOgn4nnq8Zg23BOIolGSipNCKLz8Cf7aj2g3jPmX1E=\t34567\toff\n"
    "remote\tWMwr/+0L4HJS4rsyM5oUlOUP+jTyp2HIuYPWfUNjC0c=\t(none)\t"
    "203.0.113.100:443\t0.0.0.0/0, ::/0\t1600000114\t23398\t49746\t25\n"
).encode()

# human-readable `wg show`
SHOW_OUTPUT = """
interface: home
  public key: p3p3Uzj50FS7sdrTEviJwlsFaUu1TUdBsp+VZUdzm1I=
  private key: (hidden)
  listening port: 12345
  fwmark: 0xca6c

peer: JO2If0/wZ8ajoiUSU501u6uNtDZYSIYiz/xtazIMDi0=
  endpoint: 198.51.100.1:54321
  allowed ips: 192.168.2.0/24, 192.168.1.0/24
  latest handshake: 21 seconds ago
  transfer: 74.90 KiB received, 98.13 KiB sent

interface: remote
  public key: dwOgn4nnq8Zg23BOIolGSipNCKLz8Cf7aj2g3jPmX1E=
  private key: (hidden)
  listening port: 34567
  fwmark: 0xca6c

peer: WMwr/+0L4HJS4rsyM5oUlOUP+jTyp2HIuYPWfUNjC0c=
  endpoint: 203.0.113.100:443
  allowed ips: 0.0.0.0/0, ::/0
  latest handshake: 1 minute, 54 seconds ago
  transfer: 22.85 KiB received, 48.58 KiB sent
"""


class RecordingAccumulator:
    def __init__(self):
        self.metrics = []
        self.errors = []

    def add_fields(self, measurement, fields, tags):
        self.metrics.append((measurement, fields, tags))

    def add_error(self, err):
        self.errors.append(err)


@pytest.fixture
def acc():
    return RecordingAccumulator()


@pytest.fixture
def dump_output():
    return DUMP_OUTPUT


@pytest.fixture
def show_output():
    return SHOW_OUTPUT
