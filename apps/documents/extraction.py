"""
Filename based metadata extraction.

There is no OCR here. The lower-cased file name is matched against a small
keyword table and canned defaults are returned for the first hit.
"""
import random
from datetime import timedelta

from django.utils import timezone

# Checked in order, first match wins
POLICY_RULES = [
    ('health', {'type': 'Health', 'provider': 'BlueCross BlueShield', 'premium': '$250/month', 'days': 30, 'prefix': 'H-'}),
    ('auto', {'type': 'Auto', 'provider': 'Geico', 'premium': '$125/month', 'days': 45, 'prefix': 'A-'}),
    ('life', {'type': 'Life', 'provider': 'MetLife', 'premium': '$75/month', 'days': 60, 'prefix': 'L-'}),
    ('home', {'type': 'Home', 'provider': 'State Farm', 'premium': '$150/month', 'days': 90, 'prefix': 'H-'}),
]

DEFAULT_RULE = {'type': 'General', 'provider': 'Unknown Provider', 'premium': 'Unknown', 'days': 30, 'prefix': 'G-'}


def generate_policy_number(prefix):
    return prefix + ''.join(random.choices('0123456789', k=8))


def extract_document_info(filename):
    """
    Returns a dict with type, provider, policy_number, premium and due_date
    (YYYY-MM-DD, today in UTC plus the type's offset).
    """
    lowered = (filename or '').lower()
    rule = DEFAULT_RULE
    for keyword, candidate in POLICY_RULES:
        if keyword in lowered:
            rule = candidate
            break

    due_date = timezone.now().date() + timedelta(days=rule['days'])
    return {
        'type': rule['type'],
        'provider': rule['provider'],
        'policy_number': generate_policy_number(rule['prefix']),
        'premium': rule['premium'],
        'due_date': due_date.strftime('%Y-%m-%d'),
    }
