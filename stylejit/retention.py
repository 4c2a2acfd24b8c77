# stylejit/retention.py
"""Keep/drop decisions shared by the batch builder and the runtime."""

from __future__ import annotations

from typing import AbstractSet

from stylejit.models import Classification, RetentionPolicy


def keep_rule(
    cls: Classification,
    used: AbstractSet[str],
    policy: RetentionPolicy,
) -> bool:
    """
    Build-time verdict for one rule.

    Base patterns win over class tokens; a class rule survives when any of its
    classes is in use; unknown selectors follow `policy.prune_unknown`.
    """
    if cls.is_base:
        return policy.keep_base
    if cls.classes:
        return any(c in used for c in cls.classes)
    return policy.keep_base and not policy.prune_unknown


def is_base_block(cls: Classification, policy: RetentionPolicy) -> bool:
    """
    Runtime verdict for a rule *without* class tokens: does it join the
    always-injected base block?
    """
    if cls.classes or not policy.keep_base:
        return False
    return cls.is_base or not policy.prune_unknown
