"""The CIEDE2000 colour difference."""

from __future__ import annotations

import math

__all__ = ["lab00"]

_KL = 1.0
_KC = 1.0
_KH = 1.0
_POW25_7 = 25.0**7


def lab00(l1: float, a1: float, b1: float, l2: float, a2: float, b2: float) -> float:
    """Return the squared CIEDE2000 difference between two Lab colours."""
    c1sab = math.hypot(a1, b1)
    c2sab = math.hypot(a2, b2)
    m_csab = (c1sab + c2sab) / 2
    pow_m_csab_7 = m_csab**7
    g = 0.5 * (1 - math.sqrt(pow_m_csab_7 / (pow_m_csab_7 + _POW25_7)))
    a1p = (1 + g) * a1
    a2p = (1 + g) * a2
    c1p = math.hypot(a1p, b1)
    c2p = math.hypot(a2p, b2)

    h1p = 0.0 if (b1 == 0 and a1p == 0) else math.atan2(b1, a1p)
    if h1p < 0:
        h1p += 2 * math.pi
    h2p = 0.0 if (b2 == 0 and a2p == 0) else math.atan2(b2, a2p)
    if h2p < 0:
        h2p += 2 * math.pi

    d_lp = l2 - l1
    d_cp = c2p - c1p
    half_turn = math.pi
    full_turn = 2 * math.pi

    if c1p * c2p == 0:
        d_hp_angle = 0.0
    elif abs(h2p - h1p) <= half_turn:
        d_hp_angle = h2p - h1p
    elif h2p - h1p > half_turn:
        d_hp_angle = h2p - h1p - full_turn
    else:
        d_hp_angle = h2p - h1p + full_turn

    d_hp = 2 * math.sqrt(c1p * c2p) * math.sin(d_hp_angle / 2.0)

    m_lp = (l1 + l2) / 2
    m_cp = (c1p + c2p) / 2
    if c1p * c2p == 0:
        m_hp = h1p + h2p
    elif abs(h2p - h1p) <= half_turn:
        m_hp = (h1p + h2p) / 2
    elif h1p + h2p < full_turn:
        m_hp = (h1p + h2p + full_turn) / 2
    else:
        m_hp = (h1p + h2p - full_turn) / 2

    t = (
        1
        - 0.17 * math.cos(m_hp - math.radians(30))
        + 0.24 * math.cos(2 * m_hp)
        + 0.32 * math.cos(3 * m_hp + math.radians(6))
        - 0.20 * math.cos(4 * m_hp - math.radians(63))
    )
    d_theta = math.radians(30) * math.exp(-(((m_hp - math.radians(275)) / math.radians(25)) ** 2))
    m_cp_7 = m_cp**7
    rc = 2 * math.sqrt(m_cp_7 / (_POW25_7 + m_cp_7))
    sq = (m_lp - 50) ** 2
    sl = 1 + 0.015 * sq / math.sqrt(20 + sq)
    sc = 1 + 0.045 * m_cp
    sh = 1 + 0.015 * m_cp * t
    rt = -rc * math.sin(2 * d_theta)

    term_l = d_lp / sl / _KL
    term_c = d_cp / sc / _KC
    term_h = d_hp / sh / _KH
    return term_l**2 + term_c**2 + term_h**2 + rt * term_c * term_h