"""Character comparison and similarity ranking.

Used to find library character sets that look like the one being edited.
Characters are compared on their trimmed content, so the same glyph drawn
at a different position in its box still matches.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

import structlog

from charrom.core.transforms import center_offset, trim
from charrom.domain import Character, CharacterSetConfig

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class CharacterComparison:
    """Result of comparing two trimmed characters.

    Attributes:
        differing_pixels: Cells that differ over the compared rectangle
        total_pixels: Cells in the compared rectangle
    """

    differing_pixels: int
    total_pixels: int


@dataclass
class LibraryEntry:
    """A character set offered for comparison.

    Attributes:
        id: Stable identifier of the set
        name: Display name
        characters: Decoded characters
        config: Binary layout of the set, if known
    """

    id: str
    name: str
    characters: Sequence[Character]
    config: CharacterSetConfig | None = None


@dataclass
class SimilarityResult:
    """How closely one library set matches the source characters.

    Attributes:
        entry: The compared library entry
        average_difference: Differing pixels per compared character,
            lower is more similar
        matched_characters: Characters compared (shorter of the two sets)
        total_characters: Characters in the library set
        match_percentage: 0-100, floored so near-matches never show 100
    """

    entry: LibraryEntry
    average_difference: float
    matched_characters: int
    total_characters: int
    match_percentage: int
    details: list[CharacterComparison] = field(default_factory=list, repr=False)


def _pixel_at(character: Character, row: int, col: int) -> bool:
    return 0 <= row < character.height and 0 <= col < character.width and character[row, col]


def compare_trimmed(a: Character, b: Character) -> CharacterComparison:
    """Compare two characters on their trimmed content.

    Both characters are trimmed, each is centred inside the larger of the
    two trimmed sizes with ``center_offset`` (floor centring, as in
    resize), and mismatching cells are counted over that rectangle. Two
    blank characters trim to 1x1 and compare equal.

    Args:
        a: First character
        b: Second character

    Returns:
        Differing and total pixel counts
    """
    a_trim = trim(a)
    b_trim = trim(b)

    height = max(a_trim.height, b_trim.height)
    width = max(a_trim.width, b_trim.width)

    a_row, a_col = center_offset(height, a_trim.height), center_offset(width, a_trim.width)
    b_row, b_col = center_offset(height, b_trim.height), center_offset(width, b_trim.width)

    differing = sum(
        _pixel_at(a_trim, row - a_row, col - a_col) != _pixel_at(b_trim, row - b_row, col - b_col)
        for row in range(height)
        for col in range(width)
    )

    return CharacterComparison(differing_pixels=differing, total_pixels=height * width)


def calculate_similarities(
    source: Sequence[Character],
    library: Iterable[LibraryEntry],
    exclude_id: str | None = None,
) -> list[SimilarityResult]:
    """Rank library character sets by similarity to ``source``.

    Characters are compared index by index up to the shorter of the two
    sets. Sets with nothing to compare are skipped.

    Args:
        source: Characters being edited
        library: Candidate sets
        exclude_id: Id to leave out, usually the set being edited

    Returns:
        Results sorted by average difference, most similar first
    """
    results: list[SimilarityResult] = []

    for entry in library:
        if exclude_id is not None and entry.id == exclude_id:
            continue

        compare_count = min(len(source), len(entry.characters))
        if compare_count == 0:
            logger.debug("Similarity skipped", set_id=entry.id, reason="nothing to compare")
            continue

        details = [compare_trimmed(source[i], entry.characters[i]) for i in range(compare_count)]
        total_difference = sum(d.differing_pixels for d in details)
        total_pixels = sum(d.total_pixels for d in details)

        match_percentage = (
            int((1 - total_difference / total_pixels) * 100) if total_pixels else 100
        )

        results.append(
            SimilarityResult(
                entry=entry,
                average_difference=total_difference / compare_count,
                matched_characters=compare_count,
                total_characters=len(entry.characters),
                match_percentage=match_percentage,
                details=details,
            )
        )

    results.sort(key=lambda r: r.average_difference)
    return results


def are_characters_equal(a: Character, b: Character) -> bool:
    """Check two characters for identical size and pixels."""
    return a.pixels == b.pixels


def find_changed_indices(source: Sequence[Character], target: Sequence[Character]) -> set[int]:
    """Indices where two character lists differ.

    Indices present in only one of the lists count as changed.
    """
    longest = max(len(source), len(target))
    return {
        i for i in range(longest)
        if i >= len(source) or i >= len(target) or not are_characters_equal(source[i], target[i])
    }


def find_differing_pixels(a: Character, b: Character) -> set[tuple[int, int]]:
    """Positions whose pixel differs between two characters.

    Characters of different sizes are compared over the larger extent,
    reading missing cells as off.
    """
    rows = max(a.height, b.height)
    cols = max(a.width, b.width)
    return {
        (row, col)
        for row in range(rows)
        for col in range(cols)
        if _pixel_at(a, row, col) != _pixel_at(b, row, col)
    }
