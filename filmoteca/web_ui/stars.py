# filmoteca/web_ui/stars.py
import math
from dataclasses import dataclass
from typing import List

MAX_STARS = 10


@dataclass
class StarSegment:
    value: int   # rating applied when this star is clicked
    fill: int    # 0–100, percent of the star painted


def star_segments(rating: float, max_stars: int = MAX_STARS) -> List[StarSegment]:
    """
    Ten stars for a 0–10 score: whole stars up to floor(rating), the next one
    filled by the fractional part, the rest empty.
    """
    rating = max(0.0, min(float(rating or 0), float(max_stars)))
    whole = math.floor(rating)
    segments = []
    for current in range(1, max_stars + 1):
        if current <= whole:
            fill = 100
        elif current == whole + 1:
            fill = round((rating - whole) * 100)
        else:
            fill = 0
        segments.append(StarSegment(value=current, fill=fill))
    return segments
