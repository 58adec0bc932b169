"""Progress values handed to fetch observers."""

from dataclasses import dataclass


@dataclass
class ListProgress:
    """State of the listing walk after a page has been classified."""

    page: int
    open_count: int
    closed_count: int
    total_count: int  # records received, kept or not


@dataclass
class EnrichProgress:
    """State of the enrichment pass after a pull request has been detailed."""

    done: int
    total: int
    number: int  # pull request just enriched
