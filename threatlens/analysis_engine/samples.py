"""
Random sample inputs for the analyzers ("randomize" on the analyzer pages).

A fixed share of samples is shaped like an attack so the analyzers have
something to flag. Seed the random source for reproducible samples.
"""

from __future__ import annotations

import random

from threatlens.analysis_engine.models import (
    NetworkFlow,
    Protocol,
    TransactionRecord,
    TransactionType,
)

MAX_STEP = 744  # hours in a 31-day month
ATTACK_PROTOCOLS = (Protocol.TCP, Protocol.UDP, Protocol.ICMP)
ATTACK_PORTS = (22, 23, 3389, 445)
BENIGN_PORTS = (80, 443, 8080)


def generate_random_transaction(
    rng: random.Random | None = None,
    attack_rate: float = 0.15,
) -> TransactionRecord:
    """
    Attack samples are high-value TRANSFERs that drain the account;
    benign samples are small and leave a positive balance.
    """
    rng = rng or random.Random()
    is_attack = rng.random() < attack_rate
    if is_attack:
        tx_type = TransactionType.TRANSFER
        amount = round(rng.random() * 400000 + 10000)
        old_balance = amount
        new_balance = 0
    else:
        tx_type = rng.choice(list(TransactionType))
        amount = round(rng.random() * 5000 + 10)
        old_balance = round(rng.random() * 10000 + amount)
        new_balance = old_balance - amount
    return TransactionRecord(
        step=rng.randrange(MAX_STEP) + 1,
        type=tx_type,
        amount=amount,
        old_balance=old_balance,
        new_balance=new_balance,
    )


def generate_random_flow(
    rng: random.Random | None = None,
    attack_rate: float = 0.2,
) -> NetworkFlow:
    """
    Attack samples hit remote-admin ports from an arbitrary address with
    short, large-packet sessions; benign samples are web traffic from 192.168.x.y.
    """
    rng = rng or random.Random()
    is_attack = rng.random() < attack_rate
    if is_attack:
        return NetworkFlow(
            protocol=rng.choice(ATTACK_PROTOCOLS),
            src_port=rng.randrange(1024),
            dst_port=rng.choice(ATTACK_PORTS),
            packet_size=rng.randrange(1000, 1500),
            duration=rng.randrange(10),
            src_ip=".".join(str(rng.randrange(255)) for _ in range(4)),
        )
    return NetworkFlow(
        protocol=rng.choice(list(Protocol)),
        src_port=rng.randrange(65535),
        dst_port=rng.choice(BENIGN_PORTS),
        packet_size=rng.randrange(64, 1064),
        duration=rng.randrange(30, 330),
        src_ip=f"192.168.{rng.randrange(255)}.{rng.randrange(255)}",
    )
