"""
Concrete calculators: one per member shape.

Input: member geometry in m, member count, nominal mix ratio c:s:a, unit prices.
Output: wet volume, dry volume (x1.54), cement bags, sand and aggregate.

Each shape only contributes a volume formula; the material split is shared.
"""

import math

from .base import (
    CEMENT_BAG_VOLUME, CalculatorDefinition, CostRule, count, fmt_const,
    guarded_div, metres, quantity, ratio, sq,
)

CONCRETE_DRY_VOLUME_FACTOR = 1.54

MIX_FIELDS = (
    ratio("cement_ratio", "c"),
    ratio("sand_ratio", "s"),
    ratio("aggregate_ratio", "a"),
)

COST_RULES = (
    CostRule("cement_cost", "Cement Cost", "cement_bags", "cement_price", "C1", price_unit="currency"),
    CostRule("sand_cost", "Sand Cost", "sand_volume", "sand_price", "S1"),
    CostRule("aggregate_cost", "Aggregate Cost", "aggregate_volume", "aggregate_price", "A1"),
)


def concrete_tail(volume, volume_formula, inp, constants):
    """Wet volume -> dry volume -> cement bags, sand, aggregate."""
    factor = constants["dry_volume_factor"]
    bag = constants["cement_bag_volume"]
    k, b = fmt_const(factor), fmt_const(bag)
    c, s, a = inp["cement_ratio"], inp["sand_ratio"], inp["aggregate_ratio"]
    parts = c + s + a

    dry = volume * factor
    return [
        quantity("concrete_volume", volume, "m3", volume_formula),
        quantity("dry_volume", dry, "m3", f"Concrete Volume*{k}"),
        quantity("cement_bags", guarded_div(c * dry, parts * bag), "NOS",
                 f"(c*Dry Volume)/((c+s+a)*{b})"),
        quantity("sand_volume", guarded_div(s * dry, parts), "m3", "(s*Dry Volume)/(c+s+a)"),
        quantity("aggregate_volume", guarded_div(a * dry, parts), "m3", "(a*Dry Volume)/(c+s+a)"),
    ]


def _stair_flight(i):
    going = math.sqrt(sq(i["tread"]) + sq(i["riser"]))
    waist = i["stair_width"] * i["waist_thickness"] * i["steps"] * going
    steps = i["steps"] * (i["tread"] * i["riser"] / 2) * i["stair_width"]
    return waist + steps


STAIR_FIELDS = (
    metres("stair_width", "b"), metres("tread", "T"), metres("riser", "R"),
    count("steps", "n"), metres("waist_thickness", "t"),
)
STAIR_FLIGHT_FORMULA = "b*t*n*(T^2+R^2)^0.5+n*(T*R/2)*b"


# shape id -> (title, i18n key, geometry fields, volume function, volume formula)
SHAPES = {
    "concrete_by_volume": (
        "Concrete by Volume", "byVolume.concreteByVolume",
        (metres("length", "l"), metres("width", "w"), metres("depth", "d")),
        lambda i: i["length"] * i["width"] * i["depth"],
        "l*w*d",
    ),
    "concrete_square_column": (
        "Square Column", "column.squareColumn",
        (metres("side", "a"), metres("height", "h"), count("quantity", "n")),
        lambda i: i["side"] * i["side"] * i["height"] * i["quantity"],
        "a*a*h*n",
    ),
    "concrete_rectangular_column": (
        "Rectangular Column", "column.rectangularColumn",
        (metres("length", "l"), metres("width", "w"), metres("height", "h"), count("quantity", "n")),
        lambda i: i["length"] * i["width"] * i["height"] * i["quantity"],
        "l*w*h*n",
    ),
    "concrete_round_column": (
        "Round Column", "column.roundColumn",
        (metres("diameter", "d"), metres("height", "h"), count("quantity", "n")),
        lambda i: math.pi * sq(i["diameter"] / 2) * i["height"] * i["quantity"],
        "pi*(d/2)^2*h*n",
    ),
    "concrete_box_footing": (
        "Box Footing", "footing.boxFooting",
        (metres("length", "l"), metres("width", "w"), metres("depth", "d"), count("quantity", "n")),
        lambda i: i["length"] * i["width"] * i["depth"] * i["quantity"],
        "l*w*d*n",
    ),
    "concrete_trapezoidal_footing": (
        "Trapezoidal Footing", "footing.trapezoidalFooting",
        (metres("base_length", "L"), metres("base_width", "W"), metres("base_depth", "d1"),
         metres("top_length", "l"), metres("top_width", "w"), metres("slope_depth", "d2"),
         count("quantity", "n")),
        lambda i: (i["base_length"] * i["base_width"] * i["base_depth"]
                   + (i["slope_depth"] / 3) * (i["base_length"] * i["base_width"]
                                               + i["top_length"] * i["top_width"]
                                               + math.sqrt(max(i["base_length"] * i["base_width"]
                                                               * i["top_length"] * i["top_width"], 0.0))))
        * i["quantity"],
        "(L*W*d1+(d2/3)*(L*W+l*w+(L*W*l*w)^0.5))*n",
    ),
    "concrete_straight_staircase": (
        "Straight Staircase", "staircase.straightStaircase",
        STAIR_FIELDS,
        _stair_flight,
        STAIR_FLIGHT_FORMULA,
    ),
    "concrete_dog_legged_staircase": (
        "Dog Legged Staircase", "staircase.dogLeggedStaircase",
        STAIR_FIELDS + (metres("landing_length", "Ll"), metres("landing_width", "Lw"),
                        metres("landing_thickness", "Lt")),
        lambda i: 2 * _stair_flight(i) + i["landing_length"] * i["landing_width"] * i["landing_thickness"],
        f"2*({STAIR_FLIGHT_FORMULA})+Ll*Lw*Lt",
    ),
    "concrete_wall_shape_1": (
        "Wall Shape 1", "wall.wallShape1",
        (metres("length", "l"), metres("height", "h"), metres("thickness", "t")),
        lambda i: i["length"] * i["height"] * i["thickness"],
        "l*h*t",
    ),
    "concrete_wall_shape_2": (
        "Wall Shape 2", "wall.wallShape2",
        (metres("length", "l"), metres("height", "h"),
         metres("top_thickness", "t1"), metres("bottom_thickness", "t2")),
        lambda i: i["length"] * i["height"] * (i["top_thickness"] + i["bottom_thickness"]) / 2,
        "l*h*(t1+t2)/2",
    ),
    "concrete_curb_stone_1": (
        "Curb Stone 1", "curbedStone.curbStone1",
        (metres("length", "l"), metres("width", "w"), metres("height", "h"), count("quantity", "n")),
        lambda i: i["length"] * i["width"] * i["height"] * i["quantity"],
        "l*w*h*n",
    ),
    "concrete_curb_stone_2": (
        "Curb Stone 2", "curbedStone.curbStone2",
        (metres("length", "l"), metres("top_width", "a"), metres("bottom_width", "b"),
         metres("height", "h"), count("quantity", "n")),
        lambda i: i["length"] * ((i["top_width"] + i["bottom_width"]) / 2) * i["height"] * i["quantity"],
        "l*((a+b)/2)*h*n",
    ),
    "concrete_simple_tube": (
        "Simple Tube", "tube.simpleTube",
        (metres("outer_diameter", "D"), metres("inner_diameter", "d"),
         metres("height", "h"), count("quantity", "n")),
        lambda i: math.pi * (sq(i["outer_diameter"]) - sq(i["inner_diameter"])) / 4 * i["height"] * i["quantity"],
        "pi*(D^2-d^2)/4*h*n",
    ),
    "concrete_square_tube": (
        "Square Tube", "tube.squareTube",
        (metres("outer_side", "A"), metres("inner_side", "a"),
         metres("height", "h"), count("quantity", "n")),
        lambda i: (sq(i["outer_side"]) - sq(i["inner_side"])) * i["height"] * i["quantity"],
        "(A^2-a^2)*h*n",
    ),
    "concrete_gutter_shape_1": (
        "Gutter Shape 1", "gutter.gutterShape1",
        (metres("length", "l"), metres("outer_width", "W"), metres("outer_height", "H"),
         metres("thickness", "t")),
        lambda i: i["length"] * (i["outer_width"] * i["outer_height"]
                                 - (i["outer_width"] - 2 * i["thickness"]) * (i["outer_height"] - i["thickness"])),
        "l*(W*H-(W-2*t)*(H-t))",
    ),
    "concrete_gutter_shape_2": (
        "Gutter Shape 2", "gutter.gutterShape2",
        (metres("length", "l"), metres("top_width", "B"), metres("bottom_width", "b"),
         metres("outer_height", "H"), metres("thickness", "t")),
        lambda i: i["length"] * ((i["top_width"] + i["bottom_width"]) / 2 * i["outer_height"]
                                 - ((i["top_width"] - 2 * i["thickness"]) + (i["bottom_width"] - 2 * i["thickness"]))
                                 / 2 * (i["outer_height"] - i["thickness"])),
        "l*((B+b)/2*H-((B-2*t)+(b-2*t))/2*(H-t))",
    ),
}


def _shape_compute(volume_fn, volume_formula):
    def compute(inp, constants):
        return concrete_tail(volume_fn(inp), volume_formula, inp, constants)
    return compute


def definitions():
    constants = {
        "dry_volume_factor": CONCRETE_DRY_VOLUME_FACTOR,
        "cement_bag_volume": CEMENT_BAG_VOLUME,
    }
    return [
        CalculatorDefinition(
            id=shape_id,
            title=title,
            family="concrete",
            i18n_prefix=f"concrete.{i18n_key}",
            fields=geometry + MIX_FIELDS,
            compute_fn=_shape_compute(volume_fn, volume_formula),
            constants=constants,
            cost_rules=COST_RULES,
        )
        for shape_id, (title, i18n_key, geometry, volume_fn, volume_formula) in SHAPES.items()
    ]
