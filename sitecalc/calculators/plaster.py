"""
Plaster calculators.

Two families:
  - bagged plaster (gypsum): volume * density -> weight -> bags of fixed weight
  - sand/cement mortar plaster: dry volume = wet * 1.6, split by ratio c:s
"""

from .base import (
    CEMENT_BAG_VOLUME, CalculatorDefinition, CostRule, fmt_const, guarded_div,
    metres, quantity, ratio,
)

GYPSUM_DENSITY = 715.0          # kg/m³
GYPSUM_BAG_WEIGHT = 25.0        # kg
PLASTER_DRY_VOLUME_FACTOR = 1.6

PLASTER_FIELDS = (
    metres("length", "L"),
    metres("width", "W"),
    metres("thickness", "T"),
)


def compute_bagged_plaster(inp, constants):
    density = constants["density"]
    bag_weight = constants["bag_weight"]
    d, b = fmt_const(density), fmt_const(bag_weight)

    area = inp["length"] * inp["width"]
    volume = inp["length"] * inp["width"] * inp["thickness"]
    weight = volume * density
    bags = guarded_div(weight, bag_weight)
    return [
        quantity("plaster_area", area, "sq.m.", "L*W"),
        quantity("plaster_volume", volume, "m3", "L*W*T"),
        quantity("weight_of_material", weight, "kg", f"L*W*T*{d}"),
        quantity("no_of_bags", bags, "NOS", f"(L*W*T*{d})/{b}"),
    ]


def compute_sand_plaster(inp, constants):
    factor = constants["dry_volume_factor"]
    bag = constants["cement_bag_volume"]
    k, b = fmt_const(factor), fmt_const(bag)
    c, s = inp["cement_ratio"], inp["sand_ratio"]

    area = inp["length"] * inp["width"]
    dry_volume = inp["length"] * inp["width"] * inp["thickness"] * factor
    cement_bags = guarded_div(c * dry_volume, (c + s) * bag)
    sand = guarded_div(s * dry_volume, c + s)
    return [
        quantity("plaster_area", area, "sq.m.", "L*W"),
        quantity("mortar_dry_volume", dry_volume, "m3", f"L*W*T*{k}"),
        quantity("cement_bags", cement_bags, "NOS", f"(c*(L*W*T*{k}))/((c+s)*{b})"),
        quantity("sand_volume", sand, "m3", f"(s*(L*W*T*{k}))/(c+s)"),
    ]


def definitions():
    return [
        CalculatorDefinition(
            id="gypsum_plaster",
            title="Gypsum Plaster",
            family="plaster",
            i18n_prefix="brickWorkAndPlaster.gypsumPlaster",
            fields=PLASTER_FIELDS,
            compute_fn=compute_bagged_plaster,
            constants={"density": GYPSUM_DENSITY, "bag_weight": GYPSUM_BAG_WEIGHT},
            cost_rules=(
                CostRule("material_cost", "Material Cost", "no_of_bags", "material_price", "C1",
                         price_unit="currency"),
                CostRule("sand_cost", "Sand Cost", "plaster_volume", "sand_price", "S1"),
            ),
        ),
        CalculatorDefinition(
            id="sand_plaster",
            title="Sand Plaster",
            family="plaster",
            i18n_prefix="brickWorkAndPlaster.sandPlaster",
            fields=PLASTER_FIELDS + (ratio("cement_ratio", "c"), ratio("sand_ratio", "s")),
            compute_fn=compute_sand_plaster,
            constants={
                "dry_volume_factor": PLASTER_DRY_VOLUME_FACTOR,
                "cement_bag_volume": CEMENT_BAG_VOLUME,
            },
            cost_rules=(
                CostRule("cement_cost", "Cement Cost", "cement_bags", "cement_price", "C1",
                         price_unit="currency"),
                CostRule("sand_cost", "Sand Cost", "sand_volume", "sand_price", "S1"),
            ),
        ),
    ]
