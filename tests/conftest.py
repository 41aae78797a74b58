from datetime import date

import pytest

HOLIDAYS_2018 = frozenset({
    date(2018, 1, 1),
    date(2018, 1, 15),
    date(2018, 2, 19),
    date(2018, 5, 28),
    date(2018, 7, 4),
    date(2018, 9, 3),
    date(2018, 10, 8),
    date(2018, 11, 12),
    date(2018, 11, 22),
    date(2018, 12, 25),
})


@pytest.fixture()
def holidays_2018() -> frozenset[date]:
    return HOLIDAYS_2018
