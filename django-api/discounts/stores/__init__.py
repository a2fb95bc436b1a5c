from discounts.stores.interfaces import DiscountStore, ReservationStore

__all__ = ["DiscountStore", "ReservationStore"]
