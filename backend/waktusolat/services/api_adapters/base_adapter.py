# This module defines the base interface for all upstream prayer time adapters.
from abc import ABC, abstractmethod


class BaseScheduleAdapter(ABC):
    """
    Abstract base class for upstream prayer time sources. Every adapter returns
    a month as a list of PrayerRecord values, ordered by date.
    """

    def __init__(self, base_url, timeout=30):
        self.base_url = base_url
        self.timeout = timeout

    @abstractmethod
    def fetch_month(self, zone, year, month):
        """Fetches one calendar month of prayer times for a JAKIM zone."""
        pass
