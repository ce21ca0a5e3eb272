"""Material Aggregate - an inventory item whose state is the fold of its transition log.

Invariants:
    - name non-empty, price >= 0 in a recognized currency, quantity >= 0
    - quantity.unit belongs to MATERIAL_QUANTITY_UNITS[material_type.category]
    - Each successful mutation appends exactly one transition record of the
      matching kind; a failed validation appends nothing
    - Current state == Material.from_transitions(material.transitions)
    - A replayable history holds exactly one MaterialCreated, at position 0

Design Decisions:
    - Event-style log kept on the aggregate (append-only list): replay and
      audit work without any knowledge of the storage engine
    - Every mutator builds its record first, then goes through _record(), which
      applies the record and appends it; there is no other write path
"""

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
import uuid

from farm_assets.core.domain_types import MaterialCategory, MaterialId
from farm_assets.core.errors import FieldValidationError, InvariantViolationError
from farm_assets.core.lookup_tables import MATERIAL_QUANTITY_UNITS
from farm_assets.core.material_events import (
    MaterialCreated, MaterialEvent, MaterialExpirationDateChanged,
    MaterialIsExpenseChanged, MaterialNameChanged, MaterialNotesChanged,
    MaterialPriceChanged, MaterialProducedByChanged, MaterialQuantityChanged,
    MaterialTypeChanged,
)
from farm_assets.core.material_types import MaterialType
from farm_assets.core.validators import (
    validate_expiration_date, validate_name, validate_price,
    validate_quantity, validate_required_text,
)
from farm_assets.core.value_objects import MaterialQuantity, PricePerUnit


@dataclass
class Material:
    id: MaterialId
    name: str = ""
    price_per_unit: PricePerUnit | None = None
    material_type: MaterialType | None = None
    quantity: MaterialQuantity | None = None
    expiration_date: date | None = None
    notes: str | None = None
    produced_by: str | None = None
    is_expense: bool | None = None
    created_at: datetime | None = None
    transitions: list[MaterialEvent] = field(default_factory=list)

    @classmethod
    def create(
        cls,
        name: str,
        price_per_unit: object,
        currency_code: str,
        material_type: MaterialType | None,
        quantity: object,
        quantity_unit: str,
    ) -> "Material":
        """Validate every field, then start the history with MaterialCreated."""
        clean_name = validate_name(name)
        price = validate_price(price_per_unit, currency_code)
        if material_type is None:
            raise FieldValidationError.required("type")
        amount = validate_quantity(quantity, quantity_unit, material_type.category)

        material = cls(id=MaterialId(uuid.uuid4()))
        material._record(MaterialCreated(
            material_id=material.id,
            name=clean_name,
            price_per_unit=price,
            material_type=material_type,
            quantity=amount,
            created_at=datetime.now(timezone.utc),
        ))
        return material

    @classmethod
    def from_transitions(cls, transitions: Iterable[MaterialEvent]) -> "Material":
        """Rebuild a material by replaying its history in order."""
        history = list(transitions)
        if not history or not isinstance(history[0], MaterialCreated):
            raise InvariantViolationError(
                "INVALID_MATERIAL_HISTORY",
                "Material history must start with MaterialCreated.",
            )
        material = cls(id=history[0].material_id)
        for index, event in enumerate(history):
            if index and isinstance(event, MaterialCreated):
                raise InvariantViolationError(
                    "INVALID_MATERIAL_HISTORY",
                    f"MaterialCreated at position {index} in history of '{material.id}'.",
                )
            if event.material_id != material.id:
                raise InvariantViolationError(
                    "INVALID_MATERIAL_HISTORY",
                    f"Record for '{event.material_id}' in history of '{material.id}'.",
                )
            material._record(event)
        return material

    @property
    def category(self) -> MaterialCategory | None:
        return self.material_type.category if self.material_type else None

    # --- Mutations ------------------------------------------------------------

    def change_name(self, name: str) -> None:
        self._record(MaterialNameChanged(self.id, validate_name(name)))

    def change_price_per_unit(self, price: object, currency_code: str) -> None:
        self._record(MaterialPriceChanged(self.id, validate_price(price, currency_code)))

    def change_quantity(self, quantity: object, unit: str) -> None:
        amount = validate_quantity(quantity, unit, self.material_type.category)
        self._record(MaterialQuantityChanged(self.id, amount))

    def change_material_type(
        self, material_type: MaterialType, quantity: MaterialQuantity | None = None,
    ) -> None:
        """Switch category. The quantity unit (current, or `quantity` when a new
        one comes with the switch) must be valid for the new category."""
        new_quantity = quantity or self.quantity
        if new_quantity.unit not in MATERIAL_QUANTITY_UNITS[material_type.category]:
            raise FieldValidationError.invalid_option("quantity_unit")
        self._record(MaterialTypeChanged(self.id, material_type))
        if new_quantity != self.quantity:
            self._record(MaterialQuantityChanged(self.id, new_quantity))

    def change_expiration_date(self, expiration_date: object) -> None:
        parsed = validate_expiration_date(expiration_date)
        if parsed is None:
            raise FieldValidationError.required("expiration_date")
        self._record(MaterialExpirationDateChanged(self.id, parsed))

    def change_notes(self, notes: str) -> None:
        self._record(MaterialNotesChanged(self.id, validate_required_text(notes, "notes")))

    def change_produced_by(self, produced_by: str) -> None:
        self._record(MaterialProducedByChanged(
            self.id, validate_required_text(produced_by, "produced_by"),
        ))

    def change_is_expense(self, is_expense: bool) -> None:
        self._record(MaterialIsExpenseChanged(self.id, bool(is_expense)))

    # --- Fold -----------------------------------------------------------------

    def _record(self, event: MaterialEvent) -> None:
        _APPLIERS[type(event)](self, event)
        self.transitions.append(event)


def _apply_created(material: Material, event: MaterialCreated) -> None:
    material.name = event.name
    material.price_per_unit = event.price_per_unit
    material.material_type = event.material_type
    material.quantity = event.quantity
    material.created_at = event.created_at


def _apply_name(material: Material, event: MaterialNameChanged) -> None:
    material.name = event.name


def _apply_price(material: Material, event: MaterialPriceChanged) -> None:
    material.price_per_unit = event.price_per_unit


def _apply_quantity(material: Material, event: MaterialQuantityChanged) -> None:
    material.quantity = event.quantity


def _apply_type(material: Material, event: MaterialTypeChanged) -> None:
    material.material_type = event.material_type


def _apply_expiration(material: Material, event: MaterialExpirationDateChanged) -> None:
    material.expiration_date = event.expiration_date


def _apply_notes(material: Material, event: MaterialNotesChanged) -> None:
    material.notes = event.notes


def _apply_produced_by(material: Material, event: MaterialProducedByChanged) -> None:
    material.produced_by = event.produced_by


def _apply_is_expense(material: Material, event: MaterialIsExpenseChanged) -> None:
    material.is_expense = event.is_expense


_APPLIERS: dict[type, Callable[[Material, MaterialEvent], None]] = {
    MaterialCreated: _apply_created,
    MaterialNameChanged: _apply_name,
    MaterialPriceChanged: _apply_price,
    MaterialQuantityChanged: _apply_quantity,
    MaterialTypeChanged: _apply_type,
    MaterialExpirationDateChanged: _apply_expiration,
    MaterialNotesChanged: _apply_notes,
    MaterialProducedByChanged: _apply_produced_by,
    MaterialIsExpenseChanged: _apply_is_expense,
}
