"""Tests for the field taxonomy and exclusion policy."""

from __future__ import annotations

import pytest

from spatialmin.core.references import (
    ARRAY_REFERENCE_FIELDS,
    SINGLE_REFERENCE_FIELDS,
    ExclusionPolicy,
    ReferenceClassifier,
)


class TestTaxonomy:
    """The editor's reference fields are fixed facts of the export format."""

    def test_single_reference_fields(self) -> None:
        assert SINGLE_REFERENCE_FIELDS == {
            "HQArea",
            "CombatVolume",
            "CaptureArea",
            "Area",
            "SurroundingCombatArea",
            "ExclusionAreaTeam1",
            "ExclusionAreaTeam2",
            "ExclusionAreaTeam1_OBB",
            "ExclusionAreaTeam2_OBB",
            "DestructionArea",
            "MapDetailRenderArea",
            "SectorArea",
            "RetreatArea",
            "RetreatFromArea",
            "AdvanceFromArea",
            "AdvanceToArea",
        }

    def test_array_reference_fields(self) -> None:
        assert ARRAY_REFERENCE_FIELDS == {
            "InfantrySpawns",
            "ForwardSpawns",
            "InfantrySpawnPoints_Team1",
            "InfantrySpawnPoints_Team2",
            "SpawnPoints",
            "CapturePoints",
            "MCOMs",
        }


class TestReferenceClassifier:
    def test_identity_fields(self) -> None:
        classifier = ReferenceClassifier()

        assert classifier.is_identity_field("name")
        assert classifier.is_identity_field("id")
        assert not classifier.is_identity_field("Name")
        assert classifier.is_name_field("name")
        assert classifier.is_id_field("id")
        assert not classifier.is_id_field("name")

    def test_reference_predicates(self) -> None:
        classifier = ReferenceClassifier()

        assert classifier.is_single_reference_field("HQArea")
        assert not classifier.is_single_reference_field("SpawnPoints")
        assert classifier.is_array_reference_field("SpawnPoints")
        assert not classifier.is_array_reference_field("HQArea")
        assert not classifier.is_single_reference_field("position")

    def test_extended_keeps_defaults(self) -> None:
        classifier = ReferenceClassifier.extended(
            single_reference_fields=["PatrolArea"],
            array_reference_fields=["VehicleSpawns"],
        )

        assert classifier.is_single_reference_field("PatrolArea")
        assert classifier.is_single_reference_field("HQArea")
        assert classifier.is_array_reference_field("VehicleSpawns")
        assert classifier.is_array_reference_field("MCOMs")

    def test_field_in_both_families_rejected(self) -> None:
        with pytest.raises(ValueError, match="both single and array"):
            ReferenceClassifier.extended(single_reference_fields=["MCOMs"])

    def test_identity_field_as_reference_rejected(self) -> None:
        with pytest.raises(ValueError, match="Identity fields"):
            ReferenceClassifier.extended(array_reference_fields=["id"])


class TestExclusionPolicy:
    @pytest.mark.parametrize(
        ("identifier", "excluded"),
        [
            ("Static", True),
            ("Static/Badwater_Terrain", True),
            ("Static/", True),
            ("StaticMesh", False),
            ("static/lowercase", False),
            ("Props/Static", False),
            ("TEAM_1_HQ", False),
        ],
    )
    def test_default_policy(self, identifier: str, excluded: bool) -> None:
        assert ExclusionPolicy().is_excluded(identifier) is excluded

    def test_prefix_can_be_disabled(self) -> None:
        policy = ExclusionPolicy(names=frozenset(), prefix=None)

        assert not policy.is_excluded("Static/Badwater_Terrain")
        assert not policy.is_excluded("Static")

    def test_prefix_with_separator_rejected(self) -> None:
        with pytest.raises(ValueError, match="must not contain"):
            ExclusionPolicy(prefix="Static/Props")
