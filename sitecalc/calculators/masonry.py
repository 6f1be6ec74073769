"""
Masonry calculators: AAC blocks, clay bricks, bonds, closers and wall shapes.

Input: brick size in mm, wall geometry in m, mortar ratio c:s, unit prices.
Output: wall volume, brick count, and (for clay brick) the mortar split
into cement bags and sand.

Every shape calculator shares one tail: volume -> bricks -> mortar. Only the
volume formula differs, so shapes are rows in SHAPES, not separate functions.
"""

import math

from .base import (
    CEMENT_BAG_VOLUME, CalculatorDefinition, CostRule, count, fmt_const,
    guarded_div, metres, mm, quantity, ratio, sq,
)

AAC_MORTAR_JOINT = 0.005        # m, thin-bed mortar for AAC blocks
BRICK_MORTAR_JOINT = 0.01       # m, 10 mm joint for clay bricks
BRICK_DRY_MORTAR_FACTOR = 1.33  # wet -> dry mortar volume for brickwork

BRICK_SIZE_FIELDS = (
    mm("brick_length", "L"),
    mm("brick_width", "W"),
    mm("brick_thickness", "T"),
)
MORTAR_RATIO_FIELDS = (
    ratio("cement_ratio", "c"),
    ratio("sand_ratio", "s"),
)
DEDUCTION_FIELDS = (
    metres("w1", "W1"), metres("h1", "H1"),
    metres("w2", "W2"), metres("h2", "H2"),
    metres("w3", "W3"), metres("h3", "H3"),
)

BRICK_COST = CostRule("brick_cost", "Brick Cost", "no_of_bricks", "brick_price", "B1")
CEMENT_COST = CostRule("cement_cost", "Cement Cost", "cement_bags", "cement_price", "C1",
                       price_unit="currency")
SAND_COST = CostRule("sand_cost", "Sand Cost", "sand_volume", "sand_price", "S1")

WALL_VOLUME_FORMULA = "(l*h*t)-(W1*H1*t+W2*H2*t+W3*H3*t)"


def _wall_volume(inp) -> float:
    t = inp["wall_thickness"]
    return (inp["wall_length"] * inp["wall_height"] * t) - (
        inp["w1"] * inp["h1"] * t + inp["w2"] * inp["h2"] * t + inp["w3"] * inp["h3"] * t
    )


# --- AAC block ---

def compute_aac_block(inp, constants):
    joint = constants["mortar_joint"]
    j = fmt_const(joint)
    volume = _wall_volume(inp)
    block_with_mortar = (inp["brick_length"] + joint) * (inp["brick_width"] + joint) * (inp["brick_thickness"] + joint)
    bricks = guarded_div(volume, block_with_mortar)
    return [
        quantity("volume_of_wall", volume, "m3", WALL_VOLUME_FORMULA),
        quantity("brick_with_mortar_volume", block_with_mortar, "m3",
                 f"(L+{j})*(W+{j})*(T+{j})", precision=6),
        quantity("no_of_bricks", bricks, "NOS",
                 f"({WALL_VOLUME_FORMULA})/((L+{j})*(W+{j})*(T+{j}))"),
    ]


# --- Clay brick and every brick shape ---

def brick_tail(volume, volume_formula, inp, constants):
    """Volume -> brick count -> mortar -> cement bags and sand."""
    joint = constants["mortar_joint"]
    dry_factor = constants["dry_mortar_factor"]
    bag = constants["cement_bag_volume"]
    j, k, b = fmt_const(joint), fmt_const(dry_factor), fmt_const(bag)

    L, W, T = inp["brick_length"], inp["brick_width"], inp["brick_thickness"]
    c, s = inp["cement_ratio"], inp["sand_ratio"]

    brick_with_mortar = (L + joint) * (W + joint) * (T + joint)
    bricks = guarded_div(volume, brick_with_mortar)
    wet_mortar = volume - bricks * L * W * T
    dry_mortar = wet_mortar * dry_factor
    cement_bags = guarded_div(c * dry_mortar, (c + s) * bag)
    sand = guarded_div(s * dry_mortar, c + s)

    return [
        quantity("volume_of_wall", volume, "m3", volume_formula),
        quantity("no_of_bricks", bricks, "NOS",
                 f"Volume of Wall/((L+{j})*(W+{j})*(T+{j}))"),
        quantity("wet_mortar_volume", wet_mortar, "m3",
                 "Volume of Wall-(No of Bricks*L*W*T)"),
        quantity("dry_mortar_volume", dry_mortar, "m3", f"Wet Mortar Volume*{k}"),
        quantity("cement_bags", cement_bags, "NOS",
                 f"(c*Dry Mortar Volume)/((c+s)*{b})"),
        quantity("sand_volume", sand, "m3", "(s*Dry Mortar Volume)/(c+s)"),
    ]


def compute_clay_brick(inp, constants):
    return brick_tail(_wall_volume(inp), WALL_VOLUME_FORMULA, inp, constants)


def _shape_compute(volume_fn, volume_formula):
    def compute(inp, constants):
        return brick_tail(volume_fn(inp), volume_formula, inp, constants)
    return compute


# shape id -> (title, geometry fields, volume function, volume formula)
SHAPES = {
    "brick_by_volume": (
        "Bricks by Volume",
        (metres("volume", "V"),),
        lambda i: i["volume"],
        "V",
    ),
    "brick_by_cube": (
        "Bricks by Cube",
        (metres("side", "a"),),
        lambda i: i["side"] * i["side"] * i["side"],
        "a*a*a",
    ),
    "brick_by_wall": (
        "Bricks by Wall",
        (metres("wall_length", "l"), metres("wall_height", "h"), metres("wall_thickness", "t")),
        lambda i: i["wall_length"] * i["wall_height"] * i["wall_thickness"],
        "l*h*t",
    ),
    "brick_l_wall": (
        "L Shaped Wall",
        (metres("length_1", "l1"), metres("length_2", "l2"),
         metres("wall_height", "h"), metres("wall_thickness", "t")),
        lambda i: (i["length_1"] + i["length_2"] - i["wall_thickness"]) * i["wall_height"] * i["wall_thickness"],
        "(l1+l2-t)*h*t",
    ),
    "brick_c_wall": (
        "C Shaped Wall",
        (metres("length_1", "l1"), metres("length_2", "l2"), metres("length_3", "l3"),
         metres("wall_height", "h"), metres("wall_thickness", "t")),
        lambda i: (i["length_1"] + i["length_2"] + i["length_3"] - 2 * i["wall_thickness"])
        * i["wall_height"] * i["wall_thickness"],
        "(l1+l2+l3-2*t)*h*t",
    ),
    "brick_rectangular_chamber": (
        "Rectangular Chamber",
        (metres("outer_length", "l"), metres("outer_width", "w"),
         metres("wall_height", "h"), metres("wall_thickness", "t")),
        lambda i: 2 * (i["outer_length"] + i["outer_width"] - 2 * i["wall_thickness"])
        * i["wall_height"] * i["wall_thickness"],
        "2*(l+w-2*t)*h*t",
    ),
    "brick_wall_with_door": (
        "Wall with Door",
        (metres("wall_length", "l"), metres("wall_height", "h"), metres("wall_thickness", "t"),
         metres("door_width", "dw"), metres("door_height", "dh")),
        lambda i: (i["wall_length"] * i["wall_height"] - i["door_width"] * i["door_height"]) * i["wall_thickness"],
        "(l*h-dw*dh)*t",
    ),
    "brick_wall_with_arc_door": (
        "Wall with Arch Door",
        (metres("wall_length", "l"), metres("wall_height", "h"), metres("wall_thickness", "t"),
         metres("door_width", "dw"), metres("door_height", "dh")),
        lambda i: (i["wall_length"] * i["wall_height"]
                   - (i["door_width"] * i["door_height"] + math.pi * sq(i["door_width"] / 2) / 2))
        * i["wall_thickness"],
        "(l*h-(dw*dh+pi*(dw/2)^2/2))*t",
    ),
    "brick_cavity_wall": (
        "Cavity Wall",
        (metres("wall_length", "l"), metres("wall_height", "h"), metres("leaf_thickness", "t")),
        lambda i: 2 * i["wall_length"] * i["wall_height"] * i["leaf_thickness"],
        "2*l*h*t",
    ),
    "brick_buttress_wall": (
        "Buttress Wall",
        (metres("wall_length", "l"), metres("wall_height", "h"), metres("wall_thickness", "t"),
         count("buttress_count", "n"), metres("buttress_projection", "bl"),
         metres("buttress_width", "bw")),
        lambda i: i["wall_length"] * i["wall_height"] * i["wall_thickness"]
        + i["buttress_count"] * i["buttress_projection"] * i["buttress_width"] * i["wall_height"],
        "l*h*t+n*bl*bw*h",
    ),
}


# --- Bonds ---

def _courses(inp, joint):
    return guarded_div(inp["wall_height"], inp["brick_thickness"] + joint)


def _bond_compute(bricks_fn, bricks_formula):
    def compute(inp, constants):
        joint = constants["mortar_joint"]
        j = fmt_const(joint)
        courses = _courses(inp, joint)
        bricks = bricks_fn(inp, courses, joint)
        return [
            quantity("no_of_courses", courses, "NOS", f"h/(T+{j})"),
            quantity("no_of_bricks", bricks, "NOS", bricks_formula.format(j=j)),
        ]
    return compute


# bond id -> (title, bricks(inp, courses, joint), formula template)
BONDS = {
    "stretcher_bond": (
        "Stretcher Bond",
        lambda i, n, j: n * guarded_div(i["wall_length"], i["brick_length"] + j),
        "No of Courses*(l/(L+{j}))",
    ),
    "header_bond": (
        "Header Bond",
        lambda i, n, j: n * guarded_div(i["wall_length"], i["brick_width"] + j),
        "No of Courses*(l/(W+{j}))",
    ),
    "english_bond": (
        "English Bond",
        lambda i, n, j: (n / 2) * (2 * guarded_div(i["wall_length"], i["brick_length"] + j))
        + (n / 2) * guarded_div(i["wall_length"], i["brick_width"] + j),
        "(No of Courses/2)*(2*l/(L+{j}))+(No of Courses/2)*(l/(W+{j}))",
    ),
    "flemish_bond": (
        "Flemish Bond",
        lambda i, n, j: n * 3 * guarded_div(i["wall_length"], (i["brick_length"] + j) + (i["brick_width"] + j)),
        "No of Courses*3*l/((L+{j})+(W+{j}))",
    ),
}


# --- Closers ---

def compute_closer(inp, constants):
    fraction = constants["volume_fraction"]
    pieces = constants["pieces_per_brick"]
    piece = fraction * inp["brick_length"] * inp["brick_width"] * inp["brick_thickness"]
    bricks = guarded_div(inp["closer_count"], pieces)
    return [
        quantity("closer_volume", piece, "m3", f"{fmt_const(fraction)}*L*W*T", precision=6),
        quantity("no_of_bricks", bricks, "NOS", f"n/{fmt_const(pieces)}"),
    ]


# closer id -> (title, volume fraction of a full brick, pieces cut from one brick)
CLOSERS = {
    "king_closer": ("King Closer", 0.875, 1),
    "queen_closer": ("Queen Closer", 0.5, 2),
    "half_bat": ("Half Bat", 0.5, 2),
    "three_quarter_bat": ("Three Quarter Bat", 0.75, 1),
    "quarter_bat": ("Quarter Bat", 0.25, 4),
}


def _camel(identifier: str) -> str:
    head, *rest = identifier.split("_")
    return head + "".join(part.capitalize() for part in rest)


def definitions():
    brick_constants = {
        "mortar_joint": BRICK_MORTAR_JOINT,
        "dry_mortar_factor": BRICK_DRY_MORTAR_FACTOR,
        "cement_bag_volume": CEMENT_BAG_VOLUME,
    }
    defs = [
        CalculatorDefinition(
            id="aac_block",
            title="AAC Block",
            family="masonry",
            i18n_prefix="brickWorkAndPlaster.aacBlock",
            fields=BRICK_SIZE_FIELDS + (
                metres("wall_length", "l"), metres("wall_height", "h"), metres("wall_thickness", "t"),
            ) + DEDUCTION_FIELDS,
            compute_fn=compute_aac_block,
            constants={"mortar_joint": AAC_MORTAR_JOINT},
            cost_rules=(BRICK_COST,),
        ),
        CalculatorDefinition(
            id="clay_brick",
            title="Clay Brick",
            family="masonry",
            i18n_prefix="brickWorkAndPlaster.clayBrick",
            fields=BRICK_SIZE_FIELDS + (
                metres("wall_length", "l"), metres("wall_height", "h"), metres("wall_thickness", "t"),
            ) + DEDUCTION_FIELDS + MORTAR_RATIO_FIELDS,
            compute_fn=compute_clay_brick,
            constants=brick_constants,
            cost_rules=(BRICK_COST, CEMENT_COST, SAND_COST),
        ),
    ]

    for shape_id, (title, geometry, volume_fn, volume_formula) in SHAPES.items():
        defs.append(CalculatorDefinition(
            id=shape_id,
            title=title,
            family="masonry",
            i18n_prefix=f"brickWorkAndPlaster.shapes.{_camel(shape_id)}",
            fields=BRICK_SIZE_FIELDS + geometry + MORTAR_RATIO_FIELDS,
            compute_fn=_shape_compute(volume_fn, volume_formula),
            constants=brick_constants,
            cost_rules=(BRICK_COST, CEMENT_COST, SAND_COST),
        ))

    for bond_id, (title, bricks_fn, formula) in BONDS.items():
        defs.append(CalculatorDefinition(
            id=bond_id,
            title=title,
            family="masonry",
            i18n_prefix=f"brickWorkAndPlaster.bonds.{_camel(bond_id)}",
            fields=BRICK_SIZE_FIELDS + (metres("wall_length", "l"), metres("wall_height", "h")),
            compute_fn=_bond_compute(bricks_fn, formula),
            constants={"mortar_joint": BRICK_MORTAR_JOINT},
            cost_rules=(BRICK_COST,),
        ))

    for closer_id, (title, fraction, pieces) in CLOSERS.items():
        defs.append(CalculatorDefinition(
            id=closer_id,
            title=title,
            family="masonry",
            i18n_prefix=f"brickWorkAndPlaster.closer.{_camel(closer_id)}",
            fields=BRICK_SIZE_FIELDS + (count("closer_count", "n"),),
            compute_fn=compute_closer,
            constants={"pieces_per_brick": float(pieces), "volume_fraction": fraction},
            cost_rules=(BRICK_COST,),
        ))

    return defs
