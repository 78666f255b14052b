"""Domain exceptions."""


class NutricoachError(Exception):
    """Base class for nutricoach errors."""


class ConversionError(NutricoachError, ValueError):
    """Raised when a household measure cannot be resolved to grams."""

    def __init__(self, measure_code: str, food_id: object | None = None) -> None:
        self.measure_code = measure_code
        self.food_id = food_id
        target = f" for food {food_id}" if food_id is not None else ""
        super().__init__(f"Cannot convert measure '{measure_code}' to grams{target}")


class MissingInputError(NutricoachError, LookupError):
    """Raised when a record required by a calculation is not available."""


class FoodNotFoundError(MissingInputError):
    """Raised when a food record does not exist."""

    def __init__(self, food_id: object) -> None:
        self.food_id = food_id
        super().__init__(f"Food {food_id} not found")


class PrescriptionNotFoundError(MissingInputError):
    """Raised when no prescription is active for a patient and day."""

    def __init__(self, patient_id: object, day: object) -> None:
        self.patient_id = patient_id
        self.day = day
        super().__init__(f"No active prescription for patient {patient_id} on {day}")


class EntryNotFoundError(MissingInputError):
    """Raised when a food diary entry does not exist."""

    def __init__(self, entry_id: object) -> None:
        self.entry_id = entry_id
        super().__init__(f"Diary entry {entry_id} not found")


class InvalidBiometricInputError(NutricoachError, ValueError):
    """Raised when an explicit computation is requested with unusable biometrics."""


class EnergyEstimateNotFoundError(MissingInputError):
    """Raised when a patient has no saved energy estimate."""

    def __init__(self, patient_id: object) -> None:
        self.patient_id = patient_id
        super().__init__(f"No energy estimate saved for patient {patient_id}")


class AnthropometricRecordNotFoundError(MissingInputError):
    """Raised when a patient has no recorded weight."""

    def __init__(self, patient_id: object) -> None:
        self.patient_id = patient_id
        super().__init__(f"No anthropometric record for patient {patient_id}")
