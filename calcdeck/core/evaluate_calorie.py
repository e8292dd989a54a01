"""Calorie Evaluator — daily calorie target, macros and a 7-day zig-zag plan.

Invariants:
    - Pure: same request → same result, no IO
    - Missing/zero weight, height or age → EvaluationResult.invalid()
    - Any figure that overflows → EvaluationResult.invalid()
    - Canonical units: kg, cm, kcal; weeklyChange stored in kg/week
    - Katch-McArdle only with a positive body fat %, otherwise Mifflin-St Jeor
    - Loss targets never drop below the safety floor (1200 female / 1500 male)
    - Zig-zag days average exactly to dailyCalories (pattern sums to 7)

Design Decisions:
    - Macros kept unrounded in values; grams rounded only in formatted strings
    - formulaUsed and safetyFloorApplied reported in metadata so the fallback is visible
"""

from calcdeck.core.evaluation import EvaluationRequest, EvaluationResult, all_finite
from calcdeck.core.locale_text import LocaleText, fill_template
from calcdeck.core.number_format import format_number, format_signed, round_half_up

ACTIVITY_MULTIPLIERS: dict[str, float] = {
    "sedentary": 1.2,
    "light": 1.375,
    "moderate": 1.55,
    "active": 1.725,
    "veryActive": 1.9,
}
DEFAULT_ACTIVITY_FACTOR = 1.55

DEFICIT_MAP: dict[str, int] = {"mild": 250, "moderate": 500, "aggressive": 750, "extreme": 1000}
SURPLUS_MAP: dict[str, int] = {"slow": 250, "moderate": 500, "fast": 750}

# (protein, carbs, fat) share of calories
MACRO_RATIOS: dict[str, tuple[float, float, float]] = {
    "balanced": (0.30, 0.40, 0.30),
    "keto": (0.25, 0.05, 0.70),
    "lowCarb": (0.35, 0.20, 0.45),
    "highProtein": (0.40, 0.35, 0.25),
    "leangains": (0.40, 0.40, 0.20),
}

ZIGZAG_PATTERN = (1.0, 0.85, 1.1, 0.85, 1.0, 1.15, 1.05)
DAY_KEYS = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")

SAFETY_FLOOR_KCAL = {"female": 1200, "male": 1500}
KCAL_PER_LB_FAT = 3500
LBS_PER_KG = 2.20462
KG_PER_LB = 0.453592
KETO_PROTEIN_G_PER_LB = 0.8

_GOAL_LABELS = {"maintain": "Maintain", "loss": "Loss", "gain": "Gain"}
_DIET_LABELS = {
    "balanced": "Balanced", "keto": "Keto", "lowCarb": "Low Carb",
    "highProtein": "High Protein", "leangains": "Leangains",
}
_ACTIVITY_LABELS = {
    "sedentary": "Sedentary", "light": "Light", "moderate": "Moderate",
    "active": "Active", "veryActive": "Very Active",
}
_FORMULA_LABELS = {
    "mifflin": "Mifflin-St Jeor", "harris": "Harris-Benedict", "katch": "Katch-McArdle",
}

DEFAULT_SUMMARY = (
    "Your daily target is {dailyCalories} cal ({goalLabel}). BMR: {bmr} cal, "
    "TDEE: {tdee} cal. Macros: {protein}g protein, {carbs}g carbs, {fat}g fat ({dietLabel})."
)


# ─── Formula pieces ──────────────────────────────────────────────

def resolve_bmr_formula(formula: str, body_fat_percent: float | None) -> str:
    """Katch-McArdle needs body fat; anything unusable resolves to Mifflin-St Jeor."""
    if formula == "katch":
        return "katch" if body_fat_percent is not None and body_fat_percent > 0 else "mifflin"
    if formula == "harris":
        return "harris"
    return "mifflin"


def compute_bmr(
    formula: str, gender: str, weight_kg: float, height_cm: float, age: float,
    body_fat_percent: float | None = None,
) -> float:
    """BMR in kcal/day for an already-resolved formula."""
    if formula == "katch":
        lean_mass_kg = weight_kg * (1 - body_fat_percent / 100)
        return 370 + 21.6 * lean_mass_kg
    if formula == "harris":
        if gender == "female":
            return 447.593 + 9.247 * weight_kg + 3.098 * height_cm - 4.330 * age
        return 88.362 + 13.397 * weight_kg + 4.799 * height_cm - 5.677 * age
    base = 10 * weight_kg + 6.25 * height_cm - 5 * age
    return base - 161 if gender == "female" else base + 5


def goal_adjustment(goal: str, loss_pace: str, gain_pace: str) -> float:
    if goal == "loss":
        return -float(DEFICIT_MAP.get(loss_pace, DEFICIT_MAP["moderate"]))
    if goal == "gain":
        return float(SURPLUS_MAP.get(gain_pace, SURPLUS_MAP["moderate"]))
    return 0.0


def split_macros(
    calories: float, diet_mode: str, weight_lbs: float, carb_limit_g: float,
) -> tuple[float, float, float]:
    """(protein g, carbs g, fat g) for a calorie budget."""
    if diet_mode == "keto":
        carbs = carb_limit_g
        protein = weight_lbs * KETO_PROTEIN_G_PER_LB
        fat = max((calories - carbs * 4 - protein * 4) / 9, 0.0)
        return protein, carbs, fat
    p, c, f = MACRO_RATIOS.get(diet_mode, MACRO_RATIOS["balanced"])
    return calories * p / 4, calories * c / 4, calories * f / 9


# ─── Evaluator ───────────────────────────────────────────────────

def evaluate_calorie(request: EvaluationRequest) -> EvaluationResult:
    text = request.text
    locale = request.locale

    gender = request.choice("gender", "male")
    age = request.number("age")
    activity_level = request.choice("activityLevel", "moderate")
    goal = request.choice("goal", "maintain")
    loss_pace = request.choice("lossPace", "moderate")
    gain_pace = request.choice("gainPace", "moderate")
    requested_formula = request.choice("formula", "mifflin")
    body_fat_percent = request.number("bodyFatPercent")
    diet_mode = request.choice("dietMode", "balanced")
    carb_limit_g = request.number("carbLimitG") or 25.0

    weight_kg = request.number_in_base("weight", "weight", "lbs")
    height_cm = request.number_in_base("height", "height", "cm")

    if not weight_kg or not height_cm or not age or weight_kg < 0 or height_cm < 0 or age < 0:
        return EvaluationResult.invalid()

    weight_lbs = weight_kg * LBS_PER_KG

    formula = resolve_bmr_formula(requested_formula, body_fat_percent)
    bmr = compute_bmr(formula, gender, weight_kg, height_cm, age, body_fat_percent)
    tdee = bmr * ACTIVITY_MULTIPLIERS.get(activity_level, DEFAULT_ACTIVITY_FACTOR)

    adjustment = goal_adjustment(goal, loss_pace, gain_pace)
    daily_calories = tdee + adjustment
    floor = SAFETY_FLOOR_KCAL["female" if gender == "female" else "male"]
    floor_applied = goal == "loss" and daily_calories < floor
    if floor_applied:
        daily_calories = float(floor)
        adjustment = daily_calories - tdee

    protein_g, carbs_g, fat_g = split_macros(daily_calories, diet_mode, weight_lbs, carb_limit_g)
    weekly_change_lbs = adjustment * 7 / KCAL_PER_LB_FAT
    weekly_change_kg = weekly_change_lbs * KG_PER_LB

    macro_kcal = protein_g * 4 + carbs_g * 4 + fat_g * 9
    protein_pct = protein_g * 4 / macro_kcal * 100 if macro_kcal > 0 else 0.0
    carbs_pct = carbs_g * 4 / macro_kcal * 100 if macro_kcal > 0 else 0.0
    fat_pct = fat_g * 9 / macro_kcal * 100 if macro_kcal > 0 else 0.0
    if not all_finite(
        bmr, tdee, daily_calories, protein_g, carbs_g, fat_g, protein_pct, weekly_change_kg,
    ):
        return EvaluationResult.invalid()

    # --- Labels -------------------------------------------------------------
    cal_unit = text.resolve("cal", "cal")
    g_unit = text.resolve("g", "g")
    goal_label = text.resolve(_GOAL_LABELS.get(goal, goal), _GOAL_LABELS.get(goal, goal))
    diet_label = text.resolve(
        _DIET_LABELS.get(diet_mode, diet_mode), _DIET_LABELS.get(diet_mode, diet_mode),
    )

    def kcal(value: float) -> str:
        return format_number(value, 0, locale)

    def grams(value: float) -> str:
        return f"{format_number(value, 0, locale)}{g_unit}"

    formatted = {
        "dailyCalories": f"{kcal(daily_calories)} {cal_unit}",
        "bmr": f"{kcal(bmr)} {cal_unit}",
        "tdee": f"{kcal(tdee)} {cal_unit}",
        "adjustment": f"{format_signed(adjustment, 0, locale)} {cal_unit}",
        "weeklyChange": _format_weekly_change(
            goal, weekly_change_lbs, weekly_change_kg, request.unit("weight", "lbs"), text, locale,
        ),
        "proteinG": f"{grams(protein_g)} ({format_number(protein_pct, 0, locale)}%)",
        "carbsG": f"{grams(carbs_g)} ({format_number(carbs_pct, 0, locale)}%)",
        "fatG": f"{grams(fat_g)} ({format_number(fat_pct, 0, locale)}%)",
    }

    summary = fill_template(
        text.template("summary", DEFAULT_SUMMARY),
        dailyCalories=kcal(daily_calories),
        goalLabel=goal_label,
        bmr=kcal(bmr),
        tdee=kcal(tdee),
        protein=format_number(protein_g, 0, locale),
        carbs=format_number(carbs_g, 0, locale),
        fat=format_number(fat_g, 0, locale),
        dietLabel=diet_label,
    )

    zigzag_days = _zigzag_days(daily_calories, diet_mode, weight_lbs, carb_limit_g)

    return EvaluationResult(
        values={
            "dailyCalories": daily_calories,
            "bmr": bmr,
            "tdee": tdee,
            "adjustment": adjustment,
            "weeklyChange": weekly_change_kg,
            "proteinG": protein_g,
            "carbsG": carbs_g,
            "fatG": fat_g,
            "proteinPct": protein_pct,
            "carbsPct": carbs_pct,
            "fatPct": fat_pct,
        },
        formatted=formatted,
        summary=summary,
        is_valid=True,
        metadata={
            "formulaUsed": formula,
            "formulaLabel": text.resolve(_FORMULA_LABELS[formula], _FORMULA_LABELS[formula]),
            "safetyFloorApplied": floor_applied,
            "zigzagDays": zigzag_days,
            "tableData": _zigzag_table(zigzag_days, text, locale, g_unit),
            "chartData": _activity_chart(bmr, goal, adjustment, floor, text),
            "distribution": [
                _distribution_bar("protein", text.resolve("Protein", "Protein"), protein_pct, locale),
                _distribution_bar("carbs", text.resolve("Carbs", "Carbs"), carbs_pct, locale),
                _distribution_bar("fat", text.resolve("Fat", "Fat"), fat_pct, locale),
            ],
        },
    )


# ─── Metadata builders ───────────────────────────────────────────

def _format_weekly_change(
    goal: str, change_lbs: float, change_kg: float, weight_unit: str,
    text: LocaleText, locale,
) -> str:
    if goal == "maintain":
        return ""
    week = text.resolve("week", "week")
    if weight_unit == "kg":
        amount, label = change_kg, text.resolve("kg", "kg")
    else:
        amount, label = change_lbs, text.resolve("lb", "lb")
    sign = "+" if round_half_up(amount, 2) >= 0 else ""
    return f"{sign}{format_number(amount, 2, locale)} {label}/{week}"


def _zigzag_days(
    daily_calories: float, diet_mode: str, weight_lbs: float, carb_limit_g: float,
) -> list[dict]:
    days = []
    for day_key, factor in zip(DAY_KEYS, ZIGZAG_PATTERN):
        calories = daily_calories * factor
        protein, carbs, fat = split_macros(calories, diet_mode, weight_lbs, carb_limit_g)
        days.append({
            "day": day_key, "calories": calories,
            "protein": protein, "carbs": carbs, "fat": fat,
        })
    return days


def _zigzag_table(days: list[dict], text: LocaleText, locale, g_unit: str) -> list[dict]:
    rows = [
        {
            "day": text.resolve(day["day"], day["day"]),
            "calories": format_number(day["calories"], 0, locale),
            "protein": f"{format_number(day['protein'], 0, locale)}{g_unit}",
            "carbs": f"{format_number(day['carbs'], 0, locale)}{g_unit}",
            "fat": f"{format_number(day['fat'], 0, locale)}{g_unit}",
        }
        for day in days
    ]
    count = len(days)
    rows.append({
        "day": text.resolve("Average", "Average"),
        "calories": format_number(sum(d["calories"] for d in days) / count, 0, locale),
        "protein": f"{format_number(sum(d['protein'] for d in days) / count, 0, locale)}{g_unit}",
        "carbs": f"{format_number(sum(d['carbs'] for d in days) / count, 0, locale)}{g_unit}",
        "fat": f"{format_number(sum(d['fat'] for d in days) / count, 0, locale)}{g_unit}",
    })
    return rows


def _activity_chart(
    bmr: float, goal: str, adjustment: float, floor: int, text: LocaleText,
) -> list[dict]:
    points = []
    for key, factor in ACTIVITY_MULTIPLIERS.items():
        maintenance = bmr * factor
        target = maintenance
        if goal == "loss":
            target = max(maintenance + adjustment, float(floor))
        elif goal == "gain":
            target = maintenance + adjustment
        points.append({
            "activity": text.resolve(_ACTIVITY_LABELS[key], _ACTIVITY_LABELS[key]),
            "maintenance": maintenance,
            "target": target,
        })
    return points


def _distribution_bar(bar_id: str, label: str, pct: float, locale) -> dict:
    return {
        "id": bar_id,
        "label": f"{label} ({format_number(pct, 0, locale)}%)",
        "value": pct,
        "max": 100,
    }
