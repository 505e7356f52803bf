"""
Tests unitaires pour les objets valeur du tagging.

Tests couvrant:
- EpisodeScope : validation, forme canonique, parsing
- AssociationMetadata : format des heures, ordre debut/fin
- ContentKey : portee d'episode reservee aux series
- ContentScope : types de contenu acceptes
- Couleurs : normalisation et palette
"""

import pytest

from cinetag.core.errors import ValidationError
from cinetag.core.value_objects import (
    TAG_COLORS,
    AssociationMetadata,
    ContentKey,
    ContentScope,
    ContentType,
    EpisodeScope,
    normalize_color,
    random_color,
    scope_key,
)


# ============================================================================
# EpisodeScope
# ============================================================================


class TestEpisodeScope:
    """Tests pour EpisodeScope."""

    def test_key_is_zero_padded(self):
        assert EpisodeScope(1, 3).key == "S01E03"
        assert str(EpisodeScope(12, 104)) == "S12E104"

    def test_special_season_zero_allowed(self):
        """La saison 0 (episodes speciaux) est valide."""
        assert EpisodeScope(0, 1).key == "S00E01"

    @pytest.mark.parametrize("season,episode", [(-1, 1), (1, 0), (2, -3)])
    def test_invalid_numbers_rejected(self, season, episode):
        with pytest.raises(ValidationError):
            EpisodeScope(season, episode)

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("S01E03", EpisodeScope(1, 3)),
            ("s2e10", EpisodeScope(2, 10)),
            ("1x03", EpisodeScope(1, 3)),
            ("  S00E01 ", EpisodeScope(0, 1)),
        ],
    )
    def test_parse_accepted_formats(self, text, expected):
        assert EpisodeScope.parse(text) == expected

    @pytest.mark.parametrize("text", ["", "E03", "S01", "episode 3", "S01E00"])
    def test_parse_rejects_invalid_text(self, text):
        with pytest.raises(ValidationError):
            EpisodeScope.parse(text)

    def test_ordering(self):
        """Les portees se trient par saison puis episode."""
        scopes = [EpisodeScope(2, 1), EpisodeScope(1, 10), EpisodeScope(1, 2)]
        assert sorted(scopes) == [EpisodeScope(1, 2), EpisodeScope(1, 10), EpisodeScope(2, 1)]

    def test_scope_key_of_none_is_empty(self):
        assert scope_key(None) == ""
        assert scope_key(EpisodeScope(3, 7)) == "S03E07"


# ============================================================================
# AssociationMetadata
# ============================================================================


class TestAssociationMetadata:
    """Tests pour AssociationMetadata."""

    def test_empty_by_default(self):
        assert AssociationMetadata().is_empty

    def test_notes_only_is_not_empty(self):
        assert not AssociationMetadata(notes="scene du train").is_empty

    def test_valid_passage(self):
        metadata = AssociationMetadata(start_time="00:12:30", end_time="00:15:00")
        assert metadata.start_time == "00:12:30"

    @pytest.mark.parametrize("value", ["12:30", "1:02:03", "00:61:00", "aa:bb:cc"])
    def test_invalid_time_format(self, value):
        with pytest.raises(ValidationError, match="HH:MM:SS"):
            AssociationMetadata(start_time=value)

    def test_start_after_end_rejected(self):
        with pytest.raises(ValidationError, match="posterieur"):
            AssociationMetadata(start_time="01:00:00", end_time="00:59:59")

    def test_equal_start_and_end_allowed(self):
        metadata = AssociationMetadata(start_time="01:00:00", end_time="01:00:00")
        assert metadata.end_time == "01:00:00"


# ============================================================================
# ContentKey et ContentScope
# ============================================================================


class TestContentKey:
    """Tests pour ContentKey."""

    def test_episode_scope_only_for_tv(self):
        with pytest.raises(ValidationError, match="tv"):
            ContentKey(550, ContentType.MOVIE, EpisodeScope(1, 1))

    def test_series_and_episode_keys_differ(self):
        """Une portee nulle est distincte de toute portee d'episode."""
        series = ContentKey(1396, ContentType.TV)
        episode = ContentKey(1396, ContentType.TV, EpisodeScope(1, 3))
        assert series != episode
        assert len({series, episode, ContentKey(1396, ContentType.TV)}) == 2

    def test_label(self):
        assert ContentKey(550, ContentType.MOVIE).label == "movie:550"
        assert ContentKey(1396, ContentType.TV, EpisodeScope(1, 3)).label == "tv:1396 S01E03"


class TestContentScope:
    """Tests pour ContentScope.accepts."""

    def test_both_accepts_everything(self):
        assert ContentScope.BOTH.accepts(ContentType.MOVIE)
        assert ContentScope.BOTH.accepts(ContentType.TV)

    def test_restricted_scopes(self):
        assert ContentScope.MOVIE.accepts(ContentType.MOVIE)
        assert not ContentScope.MOVIE.accepts(ContentType.TV)
        assert ContentScope.TV.accepts(ContentType.TV)
        assert not ContentScope.TV.accepts(ContentType.MOVIE)


# ============================================================================
# Couleurs
# ============================================================================


class TestTagColors:
    """Tests pour la normalisation des couleurs."""

    def test_palette_has_fourteen_colors(self):
        assert len(TAG_COLORS) == 14
        assert len(set(TAG_COLORS)) == 14

    def test_normalize_uppercases(self):
        assert normalize_color("#3b82f6") == "#3B82F6"
        assert normalize_color(" #ef4444 ") == "#EF4444"

    def test_none_draws_from_palette(self):
        assert normalize_color(None) in TAG_COLORS
        assert random_color() in TAG_COLORS

    @pytest.mark.parametrize("value", ["red", "#FFF", "3B82F6", "#GGGGGG", "#3B82F6FF"])
    def test_invalid_colors_rejected(self, value):
        with pytest.raises(ValidationError, match="Couleur invalide"):
            normalize_color(value)
