from .tour_checks import TourValidationError, is_knight_move, tour_to_coordinates, validate_tour

__all__ = ["TourValidationError", "is_knight_move", "tour_to_coordinates", "validate_tour"]
