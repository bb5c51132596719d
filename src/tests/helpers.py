"""
Shared helpers for dayfilter tests.
"""

import pytz

JAKARTA = pytz.timezone('Asia/Jakarta')
HOLIDAY_API_URL = 'https://holidays.test/api'


def holiday_payload(*dates):
    """Build a holiday API response body for the given YYYY-MM-DD dates."""
    return [
        {'Tanggal': d, 'Keterangan': f'Libur {d}', 'is_cuti': False}
        for d in dates
    ]
