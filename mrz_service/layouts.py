"""Fixed-offset field extraction for the ICAO 9303 MRZ layouts.

Every extractor expects lines whose count, length and charset were already
validated by the format detector, so slicing here cannot fail. Check-digit
mismatches are recorded in ``Checks`` and never raised.
"""
from __future__ import annotations

from collections.abc import Sequence

from .checksum import validate
from .models import Checks, MRZFormat, MRZResult
from .normalizer import FILL, unfill


def parse_names(field: str) -> tuple[str, str]:
    surname, _, given = field.partition(FILL * 2)
    return _words(surname), _words(given)


def _words(segment: str) -> str:
    return " ".join(segment.replace(FILL, " ").split())


def _checks(
    *,
    document_number_ok: bool,
    birth_date_ok: bool,
    expiry_date_ok: bool,
    composite_ok: bool,
    optional_data_ok: bool = True,
) -> Checks:
    return Checks(
        line_lengths_ok=True,
        charset_ok=True,
        document_number_ok=document_number_ok,
        birth_date_ok=birth_date_ok,
        expiry_date_ok=expiry_date_ok,
        optional_data_ok=optional_data_ok,
        composite_ok=composite_ok,
    )


def _two_line(fmt: MRZFormat, l1: str, l2: str, *, name_width: int, optional_end: int) -> MRZResult:
    # TD2 and TD3 share line 2 up to the optional data field.
    surnames, given_names = parse_names(l1[-name_width:])
    optional = l2[28:optional_end]
    composite_cd = l2[-1]

    if fmt is MRZFormat.TD3:
        optional_data_ok = validate(optional, l2[42])
        composite_data = l2[0:10] + l2[13:20] + l2[21:43]
    else:
        optional_data_ok = True
        composite_data = l2[0:10] + l2[13:20] + l2[21:28] + l2[28:35]

    return MRZResult(
        format=fmt,
        document_type=l1[0:2],
        issuing_country=l1[2:5],
        surnames=surnames,
        given_names=given_names,
        document_number=unfill(l2[0:9]),
        document_number_raw=l2[0:9],
        document_number_check_digit=l2[9],
        nationality=l2[10:13],
        birth_date_yymmdd=l2[13:19],
        birth_date_check_digit=l2[19],
        sex=l2[20],
        expiry_date_yymmdd=l2[21:27],
        expiry_date_check_digit=l2[27],
        optional_data=unfill(optional),
        checks=_checks(
            document_number_ok=validate(l2[0:9], l2[9]),
            birth_date_ok=validate(l2[13:19], l2[19]),
            expiry_date_ok=validate(l2[21:27], l2[27]),
            optional_data_ok=optional_data_ok,
            composite_ok=validate(composite_data, composite_cd),
        ),
    )


def extract_td3(lines: Sequence[str]) -> MRZResult:
    l1, l2 = lines
    return _two_line(MRZFormat.TD3, l1, l2, name_width=39, optional_end=42)


def extract_td2(lines: Sequence[str]) -> MRZResult:
    l1, l2 = lines
    return _two_line(MRZFormat.TD2, l1, l2, name_width=31, optional_end=35)


def extract_td1(lines: Sequence[str]) -> MRZResult:
    l1, l2, l3 = lines
    surnames, given_names = parse_names(l3)
    document_number = l1[5:14]
    optional_1 = l1[15:30]
    optional_2 = l2[18:29]
    composite_data = l1[5:30] + l2[0:7] + l2[8:15] + optional_2

    return MRZResult(
        format=MRZFormat.TD1,
        document_type=l1[0:2],
        issuing_country=l1[2:5],
        surnames=surnames,
        given_names=given_names,
        document_number=unfill(document_number),
        document_number_raw=document_number,
        document_number_check_digit=l1[14],
        nationality=l2[15:18],
        birth_date_yymmdd=l2[0:6],
        birth_date_check_digit=l2[6],
        sex=l2[7],
        expiry_date_yymmdd=l2[8:14],
        expiry_date_check_digit=l2[14],
        optional_data=unfill(optional_1 + optional_2),
        checks=_checks(
            document_number_ok=validate(document_number, l1[14]),
            birth_date_ok=validate(l2[0:6], l2[6]),
            expiry_date_ok=validate(l2[8:14], l2[14]),
            composite_ok=validate(composite_data, l2[29]),
        ),
    )
