from discounts.handlers.views import DiscountDetailView, RedeemDiscountView, ValidateDiscountView

__all__ = ["DiscountDetailView", "RedeemDiscountView", "ValidateDiscountView"]
