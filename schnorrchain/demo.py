"""
Narrated walkthrough of the two protocols.

1. Two-party multi-signature, one party holding a converted P-256 key.
2. A three-layer delegation chain, with a negative control.

Run with ``python -m schnorrchain``.
"""

from __future__ import annotations

import logging

from .aggregate import aggregate, aggregate_public_keys
from .config import DEFAULT_PARAMS, SchnorrParams
from .delegation import DelegationChain
from .hash import layer_challenge, message_challenge
from .keys import generate_ecdsa_key, generate_key_pair, key_pair_from_ecdsa
from .log import get_logger
from .signing import sign, verify

log = get_logger("demo")


def run_multisig_demo(
    message: str = "message-2b-signed",
    params: SchnorrParams = DEFAULT_PARAMS,
) -> bool:
    log.info("message: %s", message)

    log.info("------------- key generation -------------")
    pair_1 = generate_key_pair(params)
    log.info("key pair 1: %r", pair_1)
    ecdsa_key = generate_ecdsa_key()
    pair_2 = key_pair_from_ecdsa(ecdsa_key, params)
    log.info("key pair 2 (from P-256 ECDSA key): %r", pair_2)

    agg_key = aggregate_public_keys([pair_1.public, pair_2.public], params)
    # c = H(m ‖ Y): vulnerable to rogue keys, R is not hashed
    c = message_challenge(message, agg_key, params)

    log.info("------------- signature generation -------------")
    sig_1 = sign(c, pair_1.private, params)
    sig_2 = sign(c, pair_2.private, params)
    log.info("signature 1: %s", sig_1.to_bytes().hex())
    log.info("signature 2: %s", sig_2.to_bytes().hex())

    log.info("------------- signature validation -------------")
    if not (verify(c, sig_1, pair_1.public, params)
            and verify(c, sig_2, pair_2.public, params)):
        log.error("failed verifying partial signatures")
        return False
    log.info("partial signatures verified")

    log.info("------------- multi-signature -------------")
    result = aggregate(sig_1, sig_2, pair_1.public, pair_2.public, params)
    if not verify(c, result.signature, result.public_key, params):
        log.error("failed verifying aggregated signature")
        return False
    log.info("aggregated signature verified")
    log.info("multi-signature: %s", result.signature.to_bytes().hex())
    log.info("aggregated key:  %s", result.public_key.to_bytes().hex())
    return True


def run_delegation_demo(params: SchnorrParams = DEFAULT_PARAMS) -> bool:
    log.info("------------- delegation chain -------------")
    root = generate_key_pair(params)
    chain = DelegationChain.start(root, b"grant:read", params)
    chain.extend(b"grant:read;scope:reports")
    chain.extend(b"grant:read;scope:reports/2026")

    for i in range(len(chain)):
        ok = chain.verify_layer(i)
        log.info("layer %d verifies: %s", i, ok)
        if not ok:
            return False
    if not chain.verify():
        log.error("chain failed end-to-end verification")
        return False
    log.info("chain verified end to end")

    # negative control: the root signature against a permuted transcript
    t0, t1 = chain[0], chain[1]
    c3 = layer_challenge(t1.public_key, t0.payload, t1.payload, t0.commitment, params)
    if verify(c3, t0.signature, t0.public_key, params):
        log.error("root signature verified under the wrong challenge")
        return False
    log.info("root signature rejected under a permuted challenge")
    return True


def main() -> int:
    get_logger("demo", level=logging.INFO)
    ok = run_multisig_demo() and run_delegation_demo()
    return 0 if ok else 1
