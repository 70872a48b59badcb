"""Monster templates and encounter instancing.

Templates are static rule data. ``spawn_monster`` turns a template into a
fresh ``MonsterCombatant`` with its pre-rolled combat numbers filled in.
"""

import uuid
from dataclasses import dataclass, field

from arquest.dice.checks import proficiency_for_challenge_rating
from arquest.models.combatant import MonsterCombatant
from arquest.models.enums import DamageAffinity

# 'physical' in a template expands to the three weapon damage types.
PHYSICAL_DAMAGE_TYPES = ("slashing", "piercing", "bludgeoning")


@dataclass(frozen=True)
class MonsterTemplate:
    """Static definition of a monster."""

    key: str
    display_name: str
    challenge_rating: float
    hit_points: int
    armor_class: int
    damage_dice: str
    damage_type: str
    xp_reward: int
    creature_type: str
    biomes: tuple[str, ...] = ()
    vulnerabilities: tuple[str, ...] = ()
    resistances: tuple[str, ...] = ()
    immunities: tuple[str, ...] = ()
    spawn_weight: float = 1.0
    is_boss: bool = False

    @property
    def attack_bonus(self) -> int:
        return self.armor_class // 3

    @property
    def save_bonus(self) -> int:
        return proficiency_for_challenge_rating(self.challenge_rating)

    def damage_profile(self) -> dict[str, DamageAffinity]:
        """Map each listed damage type to its single affinity.

        Immunity wins over vulnerability, which wins over resistance.
        """
        profile: dict[str, DamageAffinity] = {}
        for affinity, types in (
            (DamageAffinity.RESISTANT, self.resistances),
            (DamageAffinity.VULNERABLE, self.vulnerabilities),
            (DamageAffinity.IMMUNE, self.immunities),
        ):
            for damage_type in _expand(types):
                profile[damage_type] = affinity
        return profile


def _expand(types: tuple[str, ...]) -> list[str]:
    expanded: list[str] = []
    for damage_type in types:
        if damage_type == "physical":
            expanded.extend(PHYSICAL_DAMAGE_TYPES)
        else:
            expanded.append(damage_type)
    return expanded


MONSTERS: dict[str, MonsterTemplate] = {
    m.key: m
    for m in [
        # CR 0-1
        MonsterTemplate("goblin", "Goblin", 0.25, 7, 15, "1d6+2", "slashing", 25,
                        "humanoid", biomes=("urban", "forest"), spawn_weight=10),
        MonsterTemplate("kobold", "Kobold", 0.125, 5, 12, "1d4+2", "piercing", 15,
                        "humanoid", biomes=("ruins", "mountain"), spawn_weight=12),
        MonsterTemplate("skeleton", "Skeleton", 0.25, 13, 13, "1d6+2", "piercing", 25,
                        "undead", biomes=("ruins",), vulnerabilities=("bludgeoning",),
                        immunities=("poison",), spawn_weight=8),
        MonsterTemplate("zombie", "Zombie", 0.25, 22, 8, "1d6+1", "bludgeoning", 25,
                        "undead", biomes=("ruins",), immunities=("poison",), spawn_weight=8),
        MonsterTemplate("giant_rat", "Giant Rat", 0.125, 7, 12, "1d4+2", "piercing", 15,
                        "beast", biomes=("urban",), spawn_weight=15),
        MonsterTemplate("wolf", "Wolf", 0.25, 11, 13, "2d4+2", "piercing", 25,
                        "beast", biomes=("forest",), spawn_weight=10),
        # CR 2-4
        MonsterTemplate("orc", "Orc", 0.5, 15, 13, "1d12+3", "slashing", 50,
                        "humanoid", biomes=("mountain", "forest"), spawn_weight=6),
        MonsterTemplate("ogre", "Ogre", 2, 59, 11, "2d8+4", "bludgeoning", 200,
                        "giant", biomes=("mountain",), spawn_weight=3),
        MonsterTemplate("ghoul", "Ghoul", 1, 22, 12, "2d6+2", "slashing", 100,
                        "undead", biomes=("ruins",), vulnerabilities=("radiant",),
                        immunities=("poison",), spawn_weight=5),
        MonsterTemplate("werewolf", "Werewolf", 3, 58, 12, "2d4+3", "piercing", 350,
                        "shapechanger", biomes=("forest",), vulnerabilities=("silver",),
                        resistances=("physical",), spawn_weight=2),
        MonsterTemplate("owlbear", "Owlbear", 3, 59, 13, "2d8+4", "slashing", 350,
                        "monstrosity", biomes=("forest",), spawn_weight=2),
        # CR 5-8
        MonsterTemplate("troll", "Troll", 5, 84, 15, "2d6+4", "slashing", 900,
                        "giant", biomes=("water", "mountain"),
                        vulnerabilities=("fire", "acid"), spawn_weight=1),
        MonsterTemplate("vampire_spawn", "Vampire Spawn", 5, 82, 15, "2d6+3", "slashing", 900,
                        "undead", biomes=("ruins",), vulnerabilities=("radiant", "sunlight"),
                        spawn_weight=1),
        # CR 9+ bosses
        MonsterTemplate("young_red_dragon", "Young Red Dragon", 10, 178, 18, "4d10+6", "fire",
                        5900, "dragon", biomes=("mountain",), immunities=("fire",),
                        spawn_weight=0.1, is_boss=True),
        MonsterTemplate("beholder", "Beholder", 13, 180, 18, "4d10", "force", 10000,
                        "aberration", biomes=("ruins",), spawn_weight=0.05, is_boss=True),
        # Trap-only
        MonsterTemplate("mimic", "Mimic", 2, 58, 12, "2d8+3", "piercing", 450,
                        "monstrosity", biomes=("ruins", "urban"), immunities=("acid",),
                        spawn_weight=0),
    ]
}


def get_monster_template(template_id: str) -> MonsterTemplate:
    """Look up a monster template.

    Raises:
        ValueError: If the template id is unknown.
    """
    template = MONSTERS.get(template_id)
    if template is None:
        raise ValueError(f"Unknown monster: '{template_id}'")
    return template


def monsters_for_challenge(max_challenge_rating: float) -> list[MonsterTemplate]:
    return [m for m in MONSTERS.values() if m.challenge_rating <= max_challenge_rating]


def spawn_monster(template_id: str) -> MonsterCombatant:
    """Create a fresh monster combatant for one encounter.

    Args:
        template_id: Key into the monster table.

    Returns:
        A MonsterCombatant at full hit points.

    Raises:
        ValueError: If the template id is unknown.
    """
    template = get_monster_template(template_id)
    return MonsterCombatant(
        id=f"{template.key}_{uuid.uuid4().hex[:8]}",
        name=template.display_name,
        template_id=template.key,
        challenge_rating=template.challenge_rating,
        armor_class=template.armor_class,
        max_hp=template.hit_points,
        current_hp=template.hit_points,
        proficiency_bonus=proficiency_for_challenge_rating(template.challenge_rating),
        attack_bonus=template.attack_bonus,
        damage_dice=template.damage_dice,
        damage_type=template.damage_type,
        save_bonus=template.save_bonus,
        xp_reward=template.xp_reward,
        creature_type=template.creature_type,
        damage_profile=template.damage_profile(),
    )
