"""
Prompts for the concept expansion chain

The JSON contract is passed as a template variable, so its braces are
never interpreted by the prompt template.
"""
from langchain_core.prompts import ChatPromptTemplate


ADDON_EXPERT_SYSTEM_PROMPT = """You are a master Minecraft Bedrock addon developer with 10+ years of experience.
You have analyzed thousands of high-quality addons from MCPEDL, CurseForge, and the official Minecraft Marketplace.

YOUR EXPERTISE INCLUDES:
1. Entity Design Patterns:
   - Balanced stat scaling (HP typically 20-500 for mobs, 100-1000 for bosses)
   - Movement speeds (0.15-0.3 slow, 0.3-0.5 normal, 0.5-0.8 fast)
   - Attack damage scaling (2-6 weak, 6-12 normal, 12-25 strong, 25+ bosses)
   - AI behavior priority chains (float=0, attack=1-2, target=3, wander=5-7)
   - Component group state machines for phases

2. Boss Design Best Practices:
   - Multiple attack phases (typically at 75%, 50%, 25% HP)
   - Minion summoning mechanics
   - Area denial attacks (projectiles, AoE)
   - Proper loot tables with rare drops

3. Item Design Standards:
   - Durability scaling (wood=59, stone=131, iron=250, diamond=1561, netherite=2031)
   - Damage tiers matching vanilla progression
   - Cooldown-based special abilities (typically 3-10 seconds)

4. Animation & Visual Polish:
   - Idle, walk, attack, hurt, death animations minimum
   - Collision boxes matching visual size

5. Balance Considerations:
   - Spawn weights (10-20 rare, 50-100 common, 100+ very common)
   - Biome-appropriate spawning and day/night awareness

CRITICAL: Always respond with valid JSON only. No explanations."""


EXPAND_HUMAN_PROMPT = """Analyze this user's Minecraft addon concept and expand it into a professional, detailed specification.

USER'S CONCEPT: "{concept}"

{concept_type_instruction}

IMPORTANT GUIDELINES:
1. If the user mentions a creature/mob/boss -> entity
2. If the user mentions a weapon/tool/food/item -> item
3. If the user mentions a block/ore/decoration -> block

For ENTITIES, ensure balanced stats for the entity type, a complete AI behavior chain
with proper priorities (use engine behavior names such as float, random_stroll,
melee_attack, nearest_attackable_target), appropriate loot and biome-appropriate spawning.
For ITEMS, ensure stats comparable to vanilla tiers, logical crafting and categorization.
For BLOCKS, ensure mining properties matching the material and sensible light/friction values.

Response language: {language_instruction}

Return this JSON structure:
{json_contract}"""


JSON_CONTRACT = """{
  "originalConcept": "user's original input",
  "expandedDescription": "detailed professional description (2-3 sentences)",
  "conceptType": "entity" | "item" | "block",
  "qualityScore": 1-10,
  "entity": {
    "identifier": "namespace:entity_name",
    "displayName": "Display Name",
    "description": "Detailed description",
    "entityType": "passive" | "neutral" | "hostile" | "boss" | "npc",
    "stats": {
      "health": {"base": 20, "max": 20},
      "damage": {"base": 5, "type": "melee"},
      "armor": 0, "knockbackResistance": 0, "movementSpeed": 0.3,
      "followRange": 16, "attackSpeed": 1.0
    },
    "physics": {"width": 0.6, "height": 1.8, "scale": 1.0, "hasGravity": true, "canFly": false, "canSwim": false},
    "behaviors": [{"name": "float", "priority": 0, "description": "Floats in water", "params": {}}],
    "abilities": [{"name": "Fire Breath", "trigger": "timed", "description": "Breathes fire", "cooldown": 5, "effects": ["burning"]}],
    "phases": [{"name": "Phase 1", "healthThreshold": 100, "description": "Normal attacks", "modifiers": {}}],
    "loot": [{"item": "minecraft:diamond", "chance": 0.1, "minCount": 1, "maxCount": 2}],
    "spawn": {"biomes": ["plains"], "time": "night", "minLight": 0, "maxLight": 7, "weight": 50, "minGroup": 1, "maxGroup": 3},
    "sounds": {"ambient": "mob.zombie.say", "hurt": "mob.zombie.hurt", "death": "mob.zombie.death"},
    "visual": {"textureStyle": "appearance", "geometryBase": "humanoid", "particleEffects": [], "glowEffect": false},
    "animations": ["idle", "walk", "attack", "death"],
    "familyTypes": ["mob", "monster"]
  },
  "item": {
    "identifier": "namespace:item_name",
    "displayName": "Display Name",
    "description": "Detailed description",
    "itemType": "weapon" | "tool" | "armor" | "food" | "throwable" | "material" | "special",
    "stats": {"damage": 7, "durability": 250, "attackSpeed": 1.6, "maxStackSize": 1, "enchantability": 10},
    "food": {"nutrition": 4, "saturation": 0.6, "canAlwaysEat": false},
    "abilities": [{"name": "Lunge", "trigger": "on_use", "description": "Dash forward", "cooldown": 5, "effects": []}],
    "crafting": {"type": "shaped", "ingredients": ["minecraft:iron_ingot", "minecraft:stick"], "pattern": [" A ", " A ", " B "], "result": {"count": 1}},
    "visual": {"textureStyle": "appearance", "glint": false, "handEquipped": true},
    "category": "equipment",
    "creativeGroup": "itemGroup.name.sword"
  },
  "block": {
    "identifier": "namespace:block_name",
    "displayName": "Display Name",
    "description": "Detailed description",
    "blockType": "building" | "decorative" | "functional" | "natural" | "redstone",
    "properties": {"hardness": 3.0, "blastResistance": 6.0, "friction": 0.6, "lightEmission": 0, "flammable": false, "mapColor": "#7F7F7F"},
    "states": [{"name": "namespace:lit", "values": [false, true], "default": false}],
    "loot": {"dropsSelf": true, "silkTouch": false, "fortuneAffected": false},
    "crafting": {"type": "shapeless", "ingredients": ["minecraft:stone"], "result": {"count": 1}},
    "visual": {"textureTop": "", "textureSide": "", "textureBottom": "", "renderMethod": "opaque", "geometryType": "full_block"},
    "sound": "stone",
    "category": "construction"
  },
  "designNotes": ["note about design decisions"],
  "balanceConsiderations": ["balance note"]
}
Include only the one of "entity", "item" or "block" that matches conceptType."""


CONCEPT_TYPE_INSTRUCTIONS = {
    "auto": "First, determine the concept type (entity/item/block), then create a HIGHLY DETAILED specification.",
    "entity": "The concept type is entity. Create a HIGHLY DETAILED entity specification.",
    "item": "The concept type is item. Create a HIGHLY DETAILED item specification.",
    "block": "The concept type is block. Create a HIGHLY DETAILED block specification.",
}


def language_instruction(language: str) -> str:
    if language == "en":
        return "English"
    return f"Language '{language}' for displayName/description/notes, English for identifiers"


EXPAND_PROMPT = ChatPromptTemplate.from_messages([
    ("system", ADDON_EXPERT_SYSTEM_PROMPT),
    ("human", EXPAND_HUMAN_PROMPT),
])


__all__ = [
    "ADDON_EXPERT_SYSTEM_PROMPT",
    "EXPAND_HUMAN_PROMPT",
    "JSON_CONTRACT",
    "CONCEPT_TYPE_INSTRUCTIONS",
    "language_instruction",
    "EXPAND_PROMPT",
]
