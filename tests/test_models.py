"""Tests for Pydantic data models."""

import math
from datetime import datetime, timezone

import pytest
from poolsense.models import (
    Pool,
    PoolShape,
    PoolType,
    ChlorineType,
    WaterAppearance,
    Measurements,
    VisualState,
    calculate_volume,
    TreatmentCategory,
    ChemicalProduct,
    ProductDraft,
    TreatmentStatus,
    TreatmentStep,
    TreatmentResult,
)


class TestPool:
    """Tests for Pool model."""

    def test_default_values(self):
        """Test default values are set correctly."""
        pool = Pool(volume=25000)

        assert pool.name == "My Pool"
        assert pool.shape == PoolShape.RECTANGULAR
        assert pool.type == PoolType.POOL
        assert pool.chlorine_type == ChlorineType.GRANULAR
        assert pool.id
        assert not pool.is_spa

    def test_generated_ids_are_unique(self):
        """Test each pool gets its own identifier."""
        assert Pool(volume=1000).id != Pool(volume=1000).id

    def test_volume_validation(self):
        """Test volume must be positive."""
        with pytest.raises(ValueError):
            Pool(volume=0)

        with pytest.raises(ValueError):
            Pool(volume=-500)

    def test_legacy_chlorine_type(self):
        """Test legacy and missing chlorine types map to granular."""
        assert Pool(volume=1000, chlorine_type="granulate").chlorine_type == ChlorineType.GRANULAR
        assert Pool(volume=1000, chlorine_type=None).chlorine_type == ChlorineType.GRANULAR
        assert Pool(volume=1000, chlorine_type="tablet").chlorine_type == ChlorineType.TABLET

    def test_non_finite_volume_rejected(self):
        """Test an infinite or NaN volume is rejected."""
        with pytest.raises(ValueError):
            Pool(volume=float("inf"))

        with pytest.raises(ValueError):
            Pool(volume=float("nan"))

    def test_spa(self):
        """Test spa detection."""
        assert Pool(volume=1500, type="spa").is_spa


class TestVolume:
    """Tests for volume estimation from dimensions."""

    def test_rectangular(self):
        """Test rectangular volume in liters."""
        assert calculate_volume(PoolShape.RECTANGULAR, length=8, width=4, depth=1.5) == 48000

    def test_round(self):
        """Test round volume in liters."""
        volume = calculate_volume(PoolShape.ROUND, diameter=4, depth=1.5)
        assert volume == pytest.approx(math.pi * 4 * 1.5 * 1000)

    def test_custom_has_no_formula(self):
        """Test custom shapes cannot be computed."""
        assert calculate_volume(PoolShape.CUSTOM, length=8, width=4, depth=1.5) == 0

    def test_from_dimensions_rounds_volume(self):
        """Test the pool volume is rounded to whole liters."""
        pool = Pool.from_dimensions(PoolShape.ROUND, diameter=4, depth=1.5, name="Round")

        assert pool.volume == 18850
        assert pool.shape == PoolShape.ROUND
        assert pool.name == "Round"

    def test_from_dimensions_rejects_empty_volume(self):
        """Test missing dimensions are rejected."""
        with pytest.raises(ValueError):
            Pool.from_dimensions(PoolShape.RECTANGULAR, length=8, width=4)

        with pytest.raises(ValueError):
            Pool.from_dimensions(PoolShape.CUSTOM, length=8, width=4, depth=1)


class TestMeasurements:
    """Tests for Measurements model."""

    def test_all_optional(self):
        """Test every reading defaults to not measured."""
        m = Measurements()

        assert m.ph is None
        assert m.chlorine is None
        assert m.alkalinity is None
        assert m.hardness is None
        assert m.cyanuric is None

    def test_parse_strings(self):
        """Test string readings are parsed and blanks become None."""
        m = Measurements(ph="7.2", chlorine="", alkalinity=" 90 ")

        assert m.ph == 7.2
        assert m.chlorine is None
        assert m.alkalinity == 90.0

    def test_zero_is_a_reading(self):
        """Test zero is kept, not treated as missing."""
        assert Measurements(chlorine=0).chlorine == 0

    def test_invalid_values(self):
        """Test out-of-range readings are rejected."""
        with pytest.raises(ValueError):
            Measurements(ph=15)

        with pytest.raises(ValueError):
            Measurements(chlorine=-1)

        with pytest.raises(ValueError):
            Measurements(ph="abc")

    @pytest.mark.parametrize("value", [float("inf"), float("nan"), "inf"])
    def test_non_finite_values_rejected(self, value):
        """Test infinite and NaN readings are rejected."""
        with pytest.raises(ValueError):
            Measurements(alkalinity=value)

        with pytest.raises(ValueError):
            Measurements(ph=value)


class TestVisualState:
    """Tests for VisualState model."""

    def test_default_values(self):
        """Test default values are set correctly."""
        visual = VisualState()

        assert visual.appearance == WaterAppearance.CLEAR
        assert not visual.strong_smell
        assert not visual.heavy_usage

    def test_has_algae(self):
        """Test green and algae appearances are detected."""
        assert VisualState(appearance="green").has_algae
        assert VisualState(appearance="algae").has_algae
        assert not VisualState(appearance="cloudy").has_algae
        assert not VisualState(appearance="brown").has_algae

    def test_unknown_appearance(self):
        """Test unknown appearances are rejected."""
        with pytest.raises(ValueError):
            VisualState(appearance="purple")


class TestChemicalProduct:
    """Tests for ChemicalProduct and ProductDraft."""

    def test_frozen(self):
        """Test products cannot be modified."""
        product = ChemicalProduct(
            name="Soda Ash", category="ph_up", dose_quantity=6, effect_change=0.1
        )
        with pytest.raises(ValueError):
            product.dose_quantity = 10

    def test_negative_values_rejected(self):
        """Test negative dosing values are rejected."""
        with pytest.raises(ValueError):
            ChemicalProduct(
                name="Bad", category="ph_up", dose_quantity=-6, effect_change=0.1
            )

    def test_non_finite_values_rejected(self):
        """Test infinite dosing values are rejected."""
        with pytest.raises(ValueError):
            ChemicalProduct(
                name="Bad",
                category="ph_up",
                dose_quantity=float("inf"),
                effect_change=0.1,
            )

        with pytest.raises(ValueError):
            ChemicalProduct(
                name="Bad",
                category="ph_up",
                dose_quantity=6,
                effect_change=0.1,
                volume_reference=float("inf"),
            )

    def test_draft_to_product(self):
        """Test a complete draft is promoted to a user product."""
        draft = ProductDraft(
            name="  My pH Up ",
            category=TreatmentCategory.PH_UP,
            dose_quantity=20,
            effect_change=0.2,
            volume_reference=5000,
        )

        product = draft.to_product()

        assert product.name == "My pH Up"
        assert product.category == TreatmentCategory.PH_UP
        assert product.volume_reference == 5000
        assert not product.is_default

    @pytest.mark.parametrize("missing", [
        {"name": ""},
        {"name": "   "},
        {"category": None},
        {"dose_quantity": None},
        {"dose_quantity": 0},
        {"volume_reference": 0},
        {"effect_change": None},
    ])
    def test_draft_requires_fields(self, missing):
        """Test incomplete drafts are rejected."""
        fields = {
            "name": "Product",
            "category": TreatmentCategory.CHLORINE,
            "dose_quantity": 3,
            "effect_change": 1,
            "volume_reference": 1000,
        }
        fields.update(missing)

        with pytest.raises(ValueError):
            ProductDraft(**fields).to_product()

    def test_draft_from_product(self):
        """Test editing starts from an existing product."""
        product = ChemicalProduct(
            name="Chlorine", category="chlorine", dose_quantity=3,
            effect_change=1, is_default=True,
        )

        draft = ProductDraft.from_product(product)
        assert draft.name == "Chlorine"
        assert draft.to_product().is_default is False


class TestTreatmentStatus:
    """Tests for TreatmentStatus enum."""

    def test_string_representation(self):
        """Test string representation."""
        assert str(TreatmentStatus.OK) == "ok"
        assert str(TreatmentStatus.WARNING) == "warning"
        assert str(TreatmentStatus.CRITICAL) == "critical"

    def test_escalate(self):
        """Test escalation only moves toward more severe."""
        assert TreatmentStatus.OK.escalate(TreatmentStatus.WARNING) == TreatmentStatus.WARNING
        assert TreatmentStatus.WARNING.escalate(TreatmentStatus.CRITICAL) == TreatmentStatus.CRITICAL
        assert TreatmentStatus.CRITICAL.escalate(TreatmentStatus.WARNING) == TreatmentStatus.CRITICAL
        assert TreatmentStatus.WARNING.escalate(TreatmentStatus.OK) == TreatmentStatus.WARNING


class TestTreatmentResult:
    """Tests for TreatmentResult model."""

    def test_to_dict(self):
        """Test dictionary conversion."""
        result = TreatmentResult(
            id="abc",
            date=datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc),
            status=TreatmentStatus.WARNING,
            summary="Needs work",
            steps=[
                TreatmentStep(
                    order=1, title="Raise pH", product="Soda Ash",
                    dose=240, unit="g", instruction="Dissolve.",
                    wait_duration="1 hour circulating",
                ),
            ],
            measurements=Measurements(ph=7.0),
            visual=VisualState(appearance="cloudy"),
        )

        data = result.to_dict()

        assert data["id"] == "abc"
        assert data["date"] == "2024-01-15T10:30:00+00:00"
        assert data["status"] == "warning"
        assert data["steps"][0]["dose"] == 240
        assert data["steps"][0]["wait_duration"] == "1 hour circulating"
        assert data["measurements"]["ph"] == 7.0
        assert data["measurements"]["chlorine"] is None
        assert data["visual"]["appearance"] == "cloudy"

    def test_dosed_steps(self):
        """Test advisories are excluded from dosed steps."""
        result = TreatmentResult(
            id="x",
            date=datetime.now(timezone.utc),
            steps=[
                TreatmentStep(order=1, title="Advice", product="Check", dose=0),
                TreatmentStep(order=2, title="Dose", product="Chlorine", dose=45, unit="g"),
            ],
        )

        assert [s.title for s in result.dosed_steps] == ["Dose"]
        assert result.steps[0].is_advisory
