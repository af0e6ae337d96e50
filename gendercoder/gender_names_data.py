# ═════════════════════════════════════════════════════════════════════════════════
# BUNDLED SEED DICTIONARY
# ═════════════════════════════════════════════════════════════════════════════════
#
# Small built-in name tables used when no CSV file is present for a tier.
# Each table is an ordered tuple of (pattern, gender_code) pairs:
#   M  = male            F  = female
#   ?M = mostly male     ?F = mostly female
#   ?  = unisex / unknown
#
# The "+" in a pattern stands for a joining space or hyphen.
# Order matters: the first entry for a key within a tier wins.
# ═════════════════════════════════════════════════════════════════════════════════

from types import MappingProxyType

# US-only tier: common given names from US records, no compound forms
US_NAMES = (
    ("aaron", "M"),
    ("adam", "M"),
    ("alan", "M"),
    ("albert", "M"),
    ("alexander", "M"),
    ("alexis", "?F"),
    ("alice", "F"),
    ("amanda", "F"),
    ("amy", "F"),
    ("andrew", "M"),
    ("angela", "F"),
    ("ann", "F"),
    ("anna", "F"),
    ("anthony", "M"),
    ("ashley", "F"),
    ("austin", "M"),
    ("barbara", "F"),
    ("betty", "F"),
    ("billy", "M"),
    ("brandon", "M"),
    ("brian", "M"),
    ("carol", "F"),
    ("carolyn", "F"),
    ("casey", "?M"),
    ("charles", "M"),
    ("christopher", "M"),
    ("cynthia", "F"),
    ("daniel", "M"),
    ("david", "M"),
    ("deborah", "F"),
    ("dennis", "M"),
    ("donald", "M"),
    ("donna", "F"),
    ("dorothy", "F"),
    ("edward", "M"),
    ("elizabeth", "F"),
    ("emily", "F"),
    ("eric", "M"),
    ("frances", "?F"),
    ("frank", "M"),
    ("gary", "M"),
    ("george", "M"),
    ("gregory", "M"),
    ("helen", "F"),
    ("jacob", "M"),
    ("james", "M"),
    ("jamie", "?F"),
    ("janet", "F"),
    ("jason", "M"),
    ("jean", "?F"),
    ("jeffrey", "M"),
    ("jennifer", "F"),
    ("jessica", "F"),
    ("jo", "?F"),
    ("joan", "F"),
    ("joe", "M"),
    ("john", "M"),
    ("jordan", "?M"),
    ("joseph", "M"),
    ("joshua", "M"),
    ("joyce", "F"),
    ("justin", "M"),
    ("karen", "F"),
    ("katherine", "F"),
    ("kelly", "?F"),
    ("kenneth", "M"),
    ("kevin", "M"),
    ("kimberly", "F"),
    ("larry", "M"),
    ("laura", "F"),
    ("leslie", "?F"),
    ("linda", "F"),
    ("lisa", "F"),
    ("margaret", "F"),
    ("maria", "F"),
    ("marie", "F"),
    ("mark", "M"),
    ("mary", "F"),
    ("matthew", "M"),
    ("melissa", "F"),
    ("michael", "M"),
    ("michelle", "F"),
    ("morgan", "?F"),
    ("nancy", "F"),
    ("nicholas", "M"),
    ("pamela", "F"),
    ("patricia", "F"),
    ("patrick", "M"),
    ("paul", "M"),
    ("peter", "M"),
    ("rachel", "F"),
    ("raymond", "M"),
    ("rebecca", "F"),
    ("richard", "M"),
    ("robert", "M"),
    ("ronald", "M"),
    ("ryan", "M"),
    ("samuel", "M"),
    ("sandra", "F"),
    ("sarah", "F"),
    ("scott", "M"),
    ("sharon", "F"),
    ("shirley", "F"),
    ("stephanie", "F"),
    ("stephen", "M"),
    ("steven", "M"),
    ("susan", "F"),
    ("taylor", "?F"),
    ("thomas", "M"),
    ("timothy", "M"),
    ("tracy", "?F"),
    ("tyler", "M"),
    ("virginia", "F"),
    ("walter", "M"),
    ("william", "M"),
)

# Wildcard tier: compound given names, "+" joins the parts
WILDCARD_NAMES = (
    ("ann+marie", "F"),
    ("anna+maria", "F"),
    ("anne+marie", "F"),
    ("billy+bob", "M"),
    ("billy+joe", "M"),
    ("betty+jo", "F"),
    ("bobbie+jo", "F"),
    ("hans+peter", "M"),
    ("jean+baptiste", "M"),
    ("jean+claude", "M"),
    ("jean+luc", "M"),
    ("jean+paul", "M"),
    ("jean+pierre", "M"),
    ("jo+ann", "F"),
    ("jo+anne", "F"),
    ("john+paul", "M"),
    ("karl+heinz", "M"),
    ("lee+ann", "F"),
    ("marie+claire", "F"),
    ("mary+ann", "F"),
    ("mary+beth", "F"),
    ("mary+ellen", "F"),
    ("mary+jane", "F"),
    ("mary+jo", "F"),
    ("mary+kate", "F"),
    ("mary+lou", "F"),
    ("sarah+jane", "F"),
)

# Foreign tier: international given names, including compounds that are
# commonly written without a separator ("Jeanluc", "Xiuying")
FOREIGN_NAMES = (
    ("abdul", "M"),
    ("ahmed", "M"),
    ("aiko", "F"),
    ("akira", "?M"),
    ("alessandro", "M"),
    ("andrea", "?F"),
    ("anja", "F"),
    ("bjorn", "M"),
    ("chen", "?M"),
    ("dmitri", "M"),
    ("fatima", "F"),
    ("francesca", "F"),
    ("giovanni", "M"),
    ("hans", "M"),
    ("hiroshi", "M"),
    ("ingrid", "F"),
    ("jean+luc", "M"),
    ("jian+guo", "M"),
    ("jürgen", "M"),
    ("kenji", "M"),
    ("li", "?F"),
    ("lin", "?F"),
    ("liu", "?F"),
    ("mei+ling", "F"),
    ("mohammed", "M"),
    ("na", "F"),
    ("nikolai", "M"),
    ("olga", "F"),
    ("pierre", "M"),
    ("priya", "F"),
    ("raj", "M"),
    ("sakura", "F"),
    ("sergei", "M"),
    ("siobhan", "F"),
    ("sven", "M"),
    ("tatiana", "F"),
    ("wei", "?M"),
    ("xiu+ying", "F"),
    ("yuki", "?F"),
    ("zhi+qiang", "M"),
)

# All tier: union table kept for callers that inspect the full dictionary.
# Lookup never consults it directly.
ALL_NAMES = US_NAMES + WILDCARD_NAMES + FOREIGN_NAMES

SEED_TABLES = MappingProxyType(
    {
        "all": ALL_NAMES,
        "us": US_NAMES,
        "foreign": FOREIGN_NAMES,
        "wildcard": WILDCARD_NAMES,
    }
)
