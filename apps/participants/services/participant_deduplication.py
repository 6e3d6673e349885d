"""Participant deduplication service using fuzzy matching."""

from typing import List, Tuple

from fuzzywuzzy import fuzz

from apps.participants.models import Participant
from apps.participants.normalization import normalize_text, normalize_contact


# Thresholds for fuzzy matching
EXACT_MATCH_THRESHOLD = 100
HIGH_SIMILARITY_THRESHOLD = 90
MEDIUM_SIMILARITY_THRESHOLD = 80


def find_potential_duplicates(
    *,
    first_name: str,
    last_name: str,
    contact: str = '',
    threshold: int = MEDIUM_SIMILARITY_THRESHOLD
) -> List[Tuple[Participant, int, str]]:
    """
    Find participants who are likely the same person.

    Args:
        first_name: First name to check
        last_name: Last name to check
        contact: Contact number to check (optional)
        threshold: Minimum similarity score (0-100)

    Returns:
        List of (participant, similarity_score, match_type) tuples
        match_type: 'exact', 'fuzzy_name', 'fuzzy_both'
    """
    name_norm = normalize_text(f"{first_name} {last_name}")
    contact_norm = normalize_contact(contact)

    candidates = []

    # Step 1: Exact normalized name
    for participant in Participant.objects.filter(name_normalized=name_norm):
        candidates.append((participant, EXACT_MATCH_THRESHOLD, 'exact'))

    if candidates:
        return candidates

    # Step 2: Same contact, similar name
    if contact_norm:
        others = []
        for participant in Participant.objects.exclude(contact=''):
            if normalize_contact(participant.contact) == contact_norm:
                score = fuzz.token_sort_ratio(name_norm, participant.name_normalized)
                # Same phone number weighs heavily
                combined = int(score * 0.7 + 100 * 0.3)
                if combined >= threshold:
                    candidates.append((participant, combined, 'fuzzy_both'))
            else:
                others.append(participant)
    else:
        others = Participant.objects.all()

    # Step 3: Name similarity alone
    seen = {p.id for p, _, _ in candidates}
    for participant in list(others)[:500]:
        if participant.id in seen:
            continue
        score = fuzz.token_sort_ratio(name_norm, participant.name_normalized)
        if score >= threshold:
            candidates.append((participant, score, 'fuzzy_name'))

    candidates.sort(key=lambda x: x[1], reverse=True)

    return candidates[:10]
