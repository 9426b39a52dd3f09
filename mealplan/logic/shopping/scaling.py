from mealplan.utilities.errors import DegenerateScalingError


def scale_quantity(quantity, original_servings, target_servings):
    """Quantity authored for `original_servings`, adjusted to `target_servings`. No rounding.

    Raises DegenerateScalingError when original_servings is zero or negative,
    rather than letting inf/NaN reach the stored shopping list.
    """
    if original_servings <= 0:
        raise DegenerateScalingError(original_servings)
    return quantity * target_servings / original_servings


__all__ = ['scale_quantity']
