from enum import Enum

__all__ = ['UpscalePeriod', 'parse_upscale_period', 'seconds_in']


class UpscalePeriod(Enum):
    """
    Target granularities of upscaling

    Months and years have a fixed length (30 and 360 days), they are not calendar-aware.
    """
    minute = 60
    hour = 3600
    day = 86400
    month = 2592000
    year = 31104000

    @property
    def seconds(self) -> int:
        """Length of the period in seconds"""
        return self.value


def parse_upscale_period(text: str) -> UpscalePeriod | None:
    """
    Parse the name of an upscale period.

    :param text: One of ``minute``, ``hour``, ``day``, ``month`` or ``year`` (case-sensitive)
    :return: The period, or None if the text is not a known period
    """
    try:
        return UpscalePeriod[text]
    except KeyError:
        return None


def seconds_in(period: UpscalePeriod) -> int:
    return period.value
