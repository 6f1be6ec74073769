"""
Steel reinforcement calculators.

Bar weight uses the standard rule of thumb: kg per metre = D² / 162 with D in mm.
Tie and stirrup cutting lengths add a hook allowance of 24·d.

Column types 1-10 differ only in the number of main bars and the number of
extra single-leg links per tie set, so they are rows in COLUMN_TYPES.
"""

from .base import (
    CalculatorDefinition, CostRule, bar_count, count, diameter, fmt_const,
    metres, mm, quantity, sq,
)

UNIT_WEIGHT_DIVISOR = 162.0     # D²/162 kg/m
HOOK_ALLOWANCE = 24.0           # x tie diameter, both hooks
LAP_FACTOR = 50.0               # x bar diameter, column lap length

STEEL_COST = CostRule("steel_cost", "Steel Cost", "total_steel_weight", "steel_price", "P1",
                      price_unit="currency per kg")

# type -> (main bars, extra single-leg links per tie set)
COLUMN_TYPES = {
    1: (4, 0),
    2: (6, 1),
    3: (8, 2),
    4: (10, 3),
    5: (12, 4),
    6: (14, 5),
    7: (16, 6),
    8: (18, 7),
    9: (20, 8),
    10: (24, 10),
}


def _kg_per_m(dia_mm, divisor):
    return sq(dia_mm) / divisor


def compute_steel_weight(inp, constants):
    k = fmt_const(constants["unit_weight_divisor"])
    unit_weight = _kg_per_m(inp["bar_diameter"], constants["unit_weight_divisor"])
    total = unit_weight * inp["bar_length"] * inp["bar_count"]
    return [
        quantity("unit_weight", unit_weight, "kg/m", f"D^2/{k}"),
        quantity("total_steel_weight", total, "kg", f"D^2/{k}*l*n"),
    ]


def compute_mesh(inp, constants):
    """Two-way bar mesh for footings and slabs, optionally with bent-up legs."""
    k = fmt_const(constants["unit_weight_divisor"])
    legs = constants.get("bent_legs", 0.0)
    cover = inp["cover"]

    leg_length = legs * (inp["depth"] - 2 * cover)
    leg_text = f"+{fmt_const(legs)}*(d-2*c)" if legs else ""

    n1 = bar_count(inp["width"] - 2 * cover, inp["main_spacing"])
    length_1 = inp["length"] - 2 * cover + leg_length
    weight_1 = n1 * length_1 * _kg_per_m(inp["main_diameter"], constants["unit_weight_divisor"])

    n2 = bar_count(inp["length"] - 2 * cover, inp["distribution_spacing"])
    length_2 = inp["width"] - 2 * cover + leg_length
    weight_2 = n2 * length_2 * _kg_per_m(inp["distribution_diameter"], constants["unit_weight_divisor"])

    return [
        quantity("main_bar_count", n1, "NOS", "floor((W-2*c)/s1)+1"),
        quantity("main_bar_length", length_1, "m", f"L-2*c{leg_text}"),
        quantity("main_bar_weight", weight_1, "kg", f"Main Bar Count*Main Bar Length*D1^2/{k}"),
        quantity("distribution_bar_count", n2, "NOS", "floor((L-2*c)/s2)+1"),
        quantity("distribution_bar_length", length_2, "m", f"W-2*c{leg_text}"),
        quantity("distribution_bar_weight", weight_2, "kg",
                 f"Distribution Bar Count*Distribution Bar Length*D2^2/{k}"),
        quantity("total_steel_weight", weight_1 + weight_2, "kg",
                 "Main Bar Weight+Distribution Bar Weight"),
    ]


def compute_column(inp, constants):
    divisor = constants["unit_weight_divisor"]
    k = fmt_const(divisor)
    bars = constants["main_bars"]
    links = constants["links"]
    hook = constants["hook_allowance"]
    lap = constants["lap_factor"]
    cover = inp["cover"]

    core_b = inp["column_width"] - 2 * cover
    core_d = inp["column_depth"] - 2 * cover
    main_length = inp["column_height"] + lap * inp["main_diameter"] / 1000
    main_weight = bars * main_length * _kg_per_m(inp["main_diameter"], divisor) * inp["quantity"]

    ties = bar_count(inp["column_height"], inp["tie_spacing"])
    tie_length = 2 * (core_b + core_d) + hook * inp["tie_diameter"] / 1000
    link_length = core_d + hook * inp["tie_diameter"] / 1000
    tie_weight = ties * (tie_length + links * link_length) * _kg_per_m(inp["tie_diameter"], divisor) * inp["quantity"]

    h, l, n, x = fmt_const(hook), fmt_const(lap), fmt_const(bars), fmt_const(links)
    results = [
        quantity("main_bar_length", main_length, "m", f"H+{l}*D/1000"),
        quantity("main_bar_weight", main_weight, "kg", f"{n}*Main Bar Length*D^2/{k}*q"),
        quantity("no_of_ties", ties, "NOS", "floor(H/s)+1"),
        quantity("tie_length", tie_length, "m", f"2*((b-2*c)+(d-2*c))+{h}*t/1000"),
    ]
    if links:
        results.append(quantity("link_length", link_length, "m", f"(d-2*c)+{h}*t/1000"))
        tie_formula = f"No of Ties*(Tie Length+{x}*Link Length)*t^2/{k}*q"
    else:
        tie_formula = f"No of Ties*Tie Length*t^2/{k}*q"
    results.append(quantity("tie_weight", tie_weight, "kg", tie_formula))
    results.append(quantity("total_steel_weight", main_weight + tie_weight, "kg",
                            "Main Bar Weight+Tie Weight"))
    return results


def compute_beam(inp, constants):
    divisor = constants["unit_weight_divisor"]
    k = fmt_const(divisor)
    h = fmt_const(constants["hook_allowance"])
    cover = inp["cover"]

    bar_length = inp["span"] - 2 * cover
    bottom = inp["bottom_bars"] * bar_length * _kg_per_m(inp["bottom_diameter"], divisor) * inp["quantity"]
    top = inp["top_bars"] * bar_length * _kg_per_m(inp["top_diameter"], divisor) * inp["quantity"]
    stirrups = bar_count(bar_length, inp["stirrup_spacing"])
    stirrup_length = (2 * ((inp["beam_width"] - 2 * cover) + (inp["beam_depth"] - 2 * cover))
                      + constants["hook_allowance"] * inp["stirrup_diameter"] / 1000)
    stirrup_weight = stirrups * stirrup_length * _kg_per_m(inp["stirrup_diameter"], divisor) * inp["quantity"]

    return [
        quantity("main_bar_length", bar_length, "m", "l-2*c"),
        quantity("bottom_bar_weight", bottom, "kg", f"n1*Main Bar Length*D1^2/{k}*q"),
        quantity("top_bar_weight", top, "kg", f"n2*Main Bar Length*D2^2/{k}*q"),
        quantity("no_of_stirrups", stirrups, "NOS", "floor((l-2*c)/s)+1"),
        quantity("stirrup_length", stirrup_length, "m", f"2*((b-2*c)+(d-2*c))+{h}*t/1000"),
        quantity("stirrup_weight", stirrup_weight, "kg", f"No of Stirrups*Stirrup Length*t^2/{k}*q"),
        quantity("total_steel_weight", bottom + top + stirrup_weight, "kg",
                 "Bottom Bar Weight+Top Bar Weight+Stirrup Weight"),
    ]


MESH_FIELDS = (
    metres("length", "L"),
    metres("width", "W"),
    mm("cover", "c"),
    diameter("main_diameter", "D1"),
    mm("main_spacing", "s1"),
    diameter("distribution_diameter", "D2"),
    mm("distribution_spacing", "s2"),
)

COLUMN_FIELDS = (
    mm("column_width", "b"),
    mm("column_depth", "d"),
    metres("column_height", "H"),
    mm("cover", "c"),
    diameter("main_diameter", "D"),
    diameter("tie_diameter", "t"),
    mm("tie_spacing", "s"),
    count("quantity", "q"),
)

BEAM_FIELDS = (
    metres("span", "l"),
    mm("beam_width", "b"),
    mm("beam_depth", "d"),
    mm("cover", "c"),
    count("bottom_bars", "n1"),
    diameter("bottom_diameter", "D1"),
    count("top_bars", "n2"),
    diameter("top_diameter", "D2"),
    diameter("stirrup_diameter", "t"),
    mm("stirrup_spacing", "s"),
    count("quantity", "q"),
)


def definitions():
    divisor = {"unit_weight_divisor": UNIT_WEIGHT_DIVISOR}
    defs = [
        CalculatorDefinition(
            id="steel_weight",
            title="Reinforcement Weight",
            family="steel",
            i18n_prefix="steel.weight",
            fields=(diameter("bar_diameter", "D"), metres("bar_length", "l"), count("bar_count", "n")),
            compute_fn=compute_steel_weight,
            constants=divisor,
            cost_rules=(STEEL_COST,),
        ),
        CalculatorDefinition(
            id="steel_footing_type_1",
            title="Footing Type 1",
            family="steel",
            i18n_prefix="steel.footing.type1",
            fields=MESH_FIELDS,
            compute_fn=compute_mesh,
            constants=divisor,
            cost_rules=(STEEL_COST,),
        ),
        CalculatorDefinition(
            id="steel_footing_type_2",
            title="Footing Type 2",
            family="steel",
            i18n_prefix="steel.footing.type2",
            fields=MESH_FIELDS + (metres("depth", "d"),),
            compute_fn=compute_mesh,
            constants={**divisor, "bent_legs": 2.0},
            cost_rules=(STEEL_COST,),
        ),
        CalculatorDefinition(
            id="steel_beam",
            title="Beam",
            family="steel",
            i18n_prefix="steel.beam",
            fields=BEAM_FIELDS,
            compute_fn=compute_beam,
            constants={**divisor, "hook_allowance": HOOK_ALLOWANCE},
            cost_rules=(STEEL_COST,),
        ),
        CalculatorDefinition(
            id="steel_slab",
            title="Slab",
            family="steel",
            i18n_prefix="steel.slab",
            fields=MESH_FIELDS,
            compute_fn=compute_mesh,
            constants=divisor,
            cost_rules=(STEEL_COST,),
        ),
    ]
    for type_no, (main_bars, links) in COLUMN_TYPES.items():
        defs.append(CalculatorDefinition(
            id=f"steel_column_type_{type_no}",
            title=f"Column Type {type_no}",
            family="steel",
            i18n_prefix=f"steel.column.type{type_no}",
            fields=COLUMN_FIELDS,
            compute_fn=compute_column,
            constants={
                **divisor,
                "main_bars": float(main_bars),
                "links": float(links),
                "hook_allowance": HOOK_ALLOWANCE,
                "lap_factor": LAP_FACTOR,
            },
            cost_rules=(STEEL_COST,),
        ))
    return defs
