"""
Purpose: directory of UK kidney support organisations for patients and carers.

Names, descriptions and services are kept in English as published by each
organisation. search_support_networks() matches a city, region or keyword;
filter_support_networks() narrows by audience or organisation type.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

ALL_UK = ["uk", "national", "england", "wales", "scotland", "northern ireland"]
DIALYSIS_UNIT_SERVICES = [
    "Haemodialysis",
    "Peritoneal dialysis",
    "Transplant services",
    "Outpatient clinics",
    "Pre-dialysis education",
]


class NetworkType(str, Enum):
    NATIONAL = "national"
    REGIONAL = "regional"
    NHS_TRUST = "nhs-trust"
    CONDITION_SPECIFIC = "condition-specific"
    CARER_SUPPORT = "carer-support"


class SupportFilter(str, Enum):
    ALL = "all"
    PATIENT = "patient"
    CARER = "carer"
    NHS = "nhs"
    NATIONAL = "national"


@dataclass(frozen=True)
class SupportNetwork:
    id: str
    name: str
    type: NetworkType
    regions: tuple[str, ...]
    description: str
    services: tuple[str, ...]
    website: str
    phone: Optional[str] = None
    for_carers: bool = True
    for_patients: bool = True

    @property
    def is_national(self) -> bool:
        return self.type in (NetworkType.NATIONAL, NetworkType.CARER_SUPPORT)

    @property
    def type_label_key(self) -> str:
        return {
            NetworkType.NATIONAL: "supportNetworks.charity",
            NetworkType.REGIONAL: "supportNetworks.regionalBadge",
            NetworkType.NHS_TRUST: "supportNetworks.nhsTrust",
            NetworkType.CONDITION_SPECIFIC: "supportNetworks.charity",
            NetworkType.CARER_SUPPORT: "supportNetworks.carerOrg",
        }[self.type]

    def searchable_text(self) -> str:
        return " ".join(
            [self.name, self.description, *self.regions, *self.services]
        ).lower()


def _network(id, name, type, regions, description, services, website, **extra) -> SupportNetwork:
    return SupportNetwork(
        id=id,
        name=name,
        type=type,
        regions=tuple(regions),
        description=description,
        services=tuple(services),
        website=website,
        **extra,
    )


SUPPORT_NETWORKS: list[SupportNetwork] = [
    # National organisations
    _network(
        "kidney-care-uk",
        "Kidney Care UK",
        NetworkType.NATIONAL,
        ALL_UK,
        "The leading UK kidney patient support charity providing practical, emotional "
        "and financial support to kidney patients and their families.",
        [
            "Helpline support",
            "Counselling services",
            "Financial grants",
            "Peer support partnerships",
            "Patient advocacy",
            "Information resources",
        ],
        "https://kidneycareuk.org/",
        phone="0808 801 0000",
    ),
    _network(
        "national-kidney-federation",
        "National Kidney Federation",
        NetworkType.NATIONAL,
        ALL_UK,
        "Federation of over 50 local kidney patient associations across the UK, "
        "offering peer support and advocacy.",
        [
            "Helpline support",
            "Local patient groups",
            "Trained peer supporters",
            "Holiday dialysis information",
            "Advocacy services",
        ],
        "https://www.kidney.org.uk/",
        phone="0800 169 0936",
    ),
    _network(
        "kidney-research-uk",
        "Kidney Research UK",
        NetworkType.NATIONAL,
        ALL_UK,
        "Funding life-saving research and providing information about kidney disease "
        "prevention, treatment and management.",
        [
            "Research funding",
            "Health information",
            "Patient involvement network",
            "Educational resources",
        ],
        "https://kidneyresearchuk.org/",
    ),
    _network(
        "carers-uk",
        "Carers UK",
        NetworkType.CARER_SUPPORT,
        ALL_UK,
        "The national charity for carers, providing expert advice, information and "
        "support for anyone caring for family or friends.",
        [
            "Helpline support",
            "Online community",
            "Carers rights information",
            "Financial support advice",
            "Local carer services directory",
        ],
        "https://www.carersuk.org/",
        phone="0808 808 7777",
        for_patients=False,
    ),
    _network(
        "carers-trust",
        "Carers Trust",
        NetworkType.CARER_SUPPORT,
        ALL_UK,
        "Network of local carer centres providing replacement care and support "
        "services to carers across the UK.",
        [
            "Respite care",
            "Carer breaks",
            "Local support groups",
            "Young carers support",
            "Carer assessments",
        ],
        "https://carers.org/",
        for_patients=False,
    ),
    _network(
        "kidney-patient-involvement-network",
        "Kidney Patient Involvement Network (KPIN)",
        NetworkType.NATIONAL,
        ALL_UK,
        "Inclusive network for kidney patients, carers and health professionals to get "
        "involved in improving kidney services.",
        [
            "Patient involvement opportunities",
            "Research participation",
            "Service improvement",
            "Peer networking",
        ],
        "https://kpin.org.uk/",
    ),
    # Condition-specific
    _network(
        "pkd-charity",
        "PKD Charity",
        NetworkType.CONDITION_SPECIFIC,
        ["uk", "national", "polycystic", "pkd"],
        "Support and information for people affected by Polycystic Kidney Disease "
        "(PKD) and their families.",
        [
            "Helpline support",
            "Local support groups",
            "Information resources",
            "Research updates",
            "Family support",
        ],
        "https://pkdcharity.org.uk/",
        phone="0300 111 1234",
    ),
    _network(
        "nest-trust",
        "NeST (Nephrotic Syndrome Trust)",
        NetworkType.CONDITION_SPECIFIC,
        ["uk", "national", "nephrotic", "syndrome"],
        "Support for people affected by Nephrotic Syndrome and their families.",
        ["Support groups", "Information resources", "Family support", "Research updates"],
        "https://nstrust.org/",
    ),
    # Yorkshire
    _network(
        "kidney-research-yorkshire",
        "Kidney Research Yorkshire",
        NetworkType.REGIONAL,
        [
            "yorkshire", "leeds", "bradford", "sheffield", "york", "hull", "wakefield",
            "huddersfield", "halifax", "dewsbury", "barnsley", "doncaster", "rotherham",
        ],
        "Funding kidney disease research in Yorkshire and supporting local kidney patients.",
        ["Research funding", "Patient support", "Local events", "Educational resources"],
        "https://www.kidneyresearchyorkshire.org.uk/",
    ),
    # NHS trusts
    _network(
        "bradford-teaching-hospitals",
        "Bradford Teaching Hospitals NHS Foundation Trust - Renal Services",
        NetworkType.NHS_TRUST,
        [
            "bradford", "airedale", "skipton", "keighley", "shipley", "bingley",
            "ilkley", "west yorkshire",
        ],
        "Comprehensive renal services including dialysis units at St Luke's Hospital "
        "and Bradford Royal Infirmary, serving Bradford and surrounding areas.",
        [
            "Haemodialysis",
            "Peritoneal dialysis",
            "Transplant care",
            "Outpatient clinics",
            "Pre-dialysis education",
        ],
        "https://www.bradfordhospitals.nhs.uk/renal-services/",
    ),
    _network(
        "leeds-teaching-hospitals",
        "Leeds Teaching Hospitals NHS Trust - Renal Services",
        NetworkType.NHS_TRUST,
        [
            "leeds", "wakefield", "dewsbury", "huddersfield", "halifax", "beeston",
            "seacroft", "west yorkshire",
        ],
        "Major regional renal centre at St James's University Hospital providing "
        "inpatient, outpatient, dialysis and transplant services.",
        [
            "Haemodialysis",
            "Peritoneal dialysis",
            "Kidney transplant centre",
            "Satellite dialysis units",
            "Outpatient clinics",
        ],
        "https://www.leedsth.nhs.uk/services/clinical-and-health-psychology/renal-kidney-medicine/",
    ),
    _network(
        "manchester-royal-infirmary",
        "Manchester Royal Infirmary - Renal Services",
        NetworkType.NHS_TRUST,
        [
            "manchester", "tameside", "glossop", "stockport", "trafford", "salford",
            "greater manchester", "south cheshire",
        ],
        "East Sector renal services serving Greater Manchester, providing "
        "comprehensive kidney care for over 1.4 million people.",
        [
            "Haemodialysis",
            "Peritoneal dialysis",
            "Transplant services",
            "Holiday dialysis support",
            "Outpatient clinics",
        ],
        "https://mft.nhs.uk/mri/services/renal-care/",
    ),
    _network(
        "sheffield-teaching-hospitals",
        "Sheffield Teaching Hospitals NHS Foundation Trust - Renal Services",
        NetworkType.NHS_TRUST,
        ["sheffield", "barnsley", "rotherham", "doncaster", "chesterfield", "south yorkshire"],
        "Renal services at the Northern General Hospital providing dialysis, transplant "
        "and outpatient care for South Yorkshire.",
        DIALYSIS_UNIT_SERVICES,
        "https://www.sth.nhs.uk/services/a-z-of-services?id=47",
    ),
    _network(
        "oxford-kidney-unit",
        "Oxford Kidney Unit",
        NetworkType.NHS_TRUST,
        ["oxford", "oxfordshire", "buckinghamshire", "swindon", "reading", "berkshire", "south east"],
        "Comprehensive regional renal service covering Oxfordshire, Buckinghamshire and "
        "surrounding areas.",
        DIALYSIS_UNIT_SERVICES,
        "https://www.ouh.nhs.uk/oku/",
    ),
    _network(
        "guys-st-thomas-renal",
        "Guy's and St Thomas' NHS Foundation Trust - Renal Services",
        NetworkType.NHS_TRUST,
        [
            "london", "southwark", "lambeth", "lewisham", "greenwich", "bromley", "kent",
            "south london", "south east",
        ],
        "Major London renal centre providing comprehensive kidney services including "
        "one of the UK's largest transplant programmes.",
        [
            "Haemodialysis",
            "Peritoneal dialysis",
            "Transplant centre",
            "Living donor programme",
            "Outpatient clinics",
        ],
        "https://www.guysandstthomas.nhs.uk/our-services/kidney-services",
    ),
    _network(
        "royal-free-renal",
        "Royal Free London NHS Foundation Trust - Renal Services",
        NetworkType.NHS_TRUST,
        ["london", "hampstead", "barnet", "enfield", "haringey", "camden", "north london"],
        "North London renal services including the UK's largest peritoneal dialysis "
        "programme.",
        DIALYSIS_UNIT_SERVICES,
        "https://www.royalfree.nhs.uk/services/services-a-z/renal-services/",
    ),
    _network(
        "birmingham-university-hospitals-renal",
        "University Hospitals Birmingham - Renal Services",
        NetworkType.NHS_TRUST,
        ["birmingham", "solihull", "west midlands", "warwickshire", "worcestershire"],
        "One of the largest renal units in Europe providing comprehensive kidney care and "
        "transplant services.",
        [
            "Haemodialysis",
            "Peritoneal dialysis",
            "Transplant centre",
            "Living donor programme",
            "Outpatient clinics",
        ],
        "https://www.uhb.nhs.uk/services/renal-services.htm",
    ),
    _network(
        "newcastle-renal-services",
        "Newcastle upon Tyne Hospitals NHS Foundation Trust - Renal Services",
        NetworkType.NHS_TRUST,
        ["newcastle", "gateshead", "sunderland", "durham", "northumberland", "north east", "tyneside"],
        "Regional renal centre providing comprehensive kidney services for the North East.",
        DIALYSIS_UNIT_SERVICES,
        "https://www.newcastle-hospitals.nhs.uk/services/renal-medicine/",
    ),
    _network(
        "liverpool-renal-services",
        "Royal Liverpool and Broadgreen University Hospitals - Renal Services",
        NetworkType.NHS_TRUST,
        ["liverpool", "merseyside", "wirral", "st helens", "knowsley", "sefton", "north west"],
        "Renal services for Merseyside including dialysis and transplant care.",
        DIALYSIS_UNIT_SERVICES,
        "https://www.rlbuht.nhs.uk/our-services/services-list/renal-medicine/",
    ),
    _network(
        "bristol-renal-services",
        "North Bristol NHS Trust - Richard Bright Renal Unit",
        NetworkType.NHS_TRUST,
        ["bristol", "bath", "somerset", "gloucestershire", "wiltshire", "south west"],
        "Regional renal centre at Southmead Hospital serving the South West.",
        DIALYSIS_UNIT_SERVICES,
        "https://www.nbt.nhs.uk/our-services/a-z-services/renal-services",
    ),
    # Scotland, Wales, Northern Ireland
    _network(
        "scottish-renal-association",
        "Scottish Renal Association",
        NetworkType.REGIONAL,
        ["scotland", "edinburgh", "glasgow", "aberdeen", "dundee", "inverness", "scottish"],
        "Supporting kidney patients across Scotland with local groups and resources.",
        ["Local patient groups", "Information resources", "Patient advocacy", "Peer support"],
        "https://www.scottishrenal.org/",
    ),
    _network(
        "kidney-wales",
        "Kidney Wales",
        NetworkType.REGIONAL,
        ["wales", "cardiff", "swansea", "newport", "bangor", "welsh"],
        "Supporting kidney patients and families across Wales.",
        ["Support groups", "Information resources", "Patient advocacy", "Welsh language support"],
        "https://www.kidneywales.cymru/",
    ),
    _network(
        "ni-kidney-patient-association",
        "Northern Ireland Kidney Patient Association",
        NetworkType.REGIONAL,
        ["northern ireland", "belfast", "derry", "newry", "armagh", "ni"],
        "Supporting kidney patients across Northern Ireland.",
        ["Support groups", "Patient advocacy", "Information resources", "Peer support"],
        "https://nikpa.org/",
    ),
]


def get_national_organisations() -> list[SupportNetwork]:
    return [n for n in SUPPORT_NETWORKS if n.is_national]


def search_support_networks(query: str) -> list[SupportNetwork]:
    """
    Networks whose name, description, regions or services contain any word of
    the query. National organisations come first; otherwise table order is
    kept. An empty query returns the national organisations.
    """
    terms = (query or "").lower().split()
    if not terms:
        return get_national_organisations()
    hits = [n for n in SUPPORT_NETWORKS if any(term in n.searchable_text() for term in terms)]
    return sorted(hits, key=lambda n: not n.is_national)


def filter_support_networks(
    networks: Iterable[SupportNetwork], support_filter: SupportFilter | str = SupportFilter.ALL
) -> list[SupportNetwork]:
    support_filter = SupportFilter(support_filter)
    networks = list(networks)
    if support_filter == SupportFilter.PATIENT:
        return [n for n in networks if n.for_patients and n.type != NetworkType.CARER_SUPPORT]
    if support_filter == SupportFilter.CARER:
        return [n for n in networks if n.for_carers]
    if support_filter == SupportFilter.NHS:
        return [n for n in networks if n.type == NetworkType.NHS_TRUST]
    if support_filter == SupportFilter.NATIONAL:
        return [n for n in networks if n.is_national]
    return networks


def split_by_scope(networks: Iterable[SupportNetwork]) -> tuple[list[SupportNetwork], list[SupportNetwork]]:
    """(national and condition-specific, regional and NHS trust)."""
    networks = list(networks)
    wide = (NetworkType.NATIONAL, NetworkType.CARER_SUPPORT, NetworkType.CONDITION_SPECIFIC)
    return (
        [n for n in networks if n.type in wide],
        [n for n in networks if n.type not in wide],
    )
