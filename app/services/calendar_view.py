"""Calendar views over ranking items, grouped by the day they were eaten."""

import calendar
from datetime import date
from itertools import groupby

from app.repositories.gateway import RankingGateway
from app.schemas.ranking_item import CalendarDay, RankingItemRecord


def items_for_date(gateway: RankingGateway, day: date) -> list[RankingItemRecord]:
    return gateway.list_items(eaten_on=day)


def month_overview(gateway: RankingGateway, year: int, month: int) -> list[CalendarDay]:
    """
    Days of the month that have entries, in date order. The first item
    registered on a day is its cover.
    """
    last_day = calendar.monthrange(year, month)[1]
    items = gateway.list_items(eaten_from=date(year, month, 1), eaten_until=date(year, month, last_day))
    days = []
    for eaten_at, group in groupby(items, key=lambda item: item.eaten_at):
        entries = list(group)
        days.append(CalendarDay(eaten_at=eaten_at, cover=entries[0], items=entries))
    return days
