# brandpipe/seeder.py
import logging
import random
from dataclasses import dataclass
from pathlib import Path

import pandas as pd

from brandpipe.normalizers.types import MIN_LOCATIONS, MIN_YEAR, CanonicalBrand, current_year

log = logging.getLogger(__name__)

PREFIX = ["Blue","Golden","Northern","Silver","Urban","Royal","Green","Summit","Harbor","Maple","Iron","Bright"]
CORE   = ["Oak","River","Peak","Stone","Bay","Field","Crest","Bridge","Lane","Ridge","Forge","Vale"]
SUFFIX = ["Inc","LLC","Group","& Sons","Co","Holdings","Partners","Ltd"]
CITIES = ["New York","San Francisco","London","Berlin","Tokyo","Toronto","Sydney","Dublin","Paris","Chicago","Madrid","Seoul"]

COLUMNS = {
    "case_number": ("Case Number", 12),
    "brand_name": ("Brand Name", 35),
    "year_founded": ("Year Founded", 15),
    "headquarters": ("Headquarters", 25),
    "number_of_locations": ("Number of Locations", 20),
    "test_purpose": ("Test Purpose", 40),
    "notes": ("Notes", 50),
}
SHEET_NAME = "Seed Data Cases"


@dataclass
class SeedCase:
    case_number: int
    brand_name: str
    year_founded: int
    headquarters: str
    number_of_locations: int
    test_purpose: str
    notes: str

    def canonical(self) -> CanonicalBrand:
        return {
            "brandName": self.brand_name,
            "yearFounded": self.year_founded,
            "headquarters": self.headquarters,
            "numberOfLocations": self.number_of_locations,
        }


def _company(rng: random.Random) -> str:
    return f"{rng.choice(PREFIX)} {rng.choice(CORE)} {rng.choice(SUFFIX)}"


def generate_seed_cases(year: int | None = None, rng: random.Random | None = None) -> list[SeedCase]:
    """
    Ten brands exercising the canonical boundaries: oldest/newest year,
    a single location, and progressively larger chains. Names and cities are random.
    """
    year = year or current_year()
    rng = rng or random.Random()

    # (year founded, locations, purpose, notes)
    plan = [
        (MIN_YEAR, 100, "Test minimum year boundary (1600)",
         "Oldest possible brand to test lower boundary validation"),
        (1850, 250, "Test historical brand from 1800s",
         "Victorian era brand, tests historical data handling"),
        (1920, 500, "Test early 20th century brand",
         "Post-WWI era brand, tests early modern period"),
        (1950, 1000, "Test mid-20th century brand",
         "Post-WWII boom era, tests modern brand establishment"),
        (2000, 750, "Test millennium era brand",
         "Dot-com era brand, tests recent historical data"),
        (year, 50, "Test current year boundary",
         "Brand founded this year, tests maximum year validation"),
        (2010, MIN_LOCATIONS, "Test minimum locations boundary (1)",
         "Single location startup, tests lower boundary for locations"),
        (1980, 50, "Test small chain business",
         "Small regional chain, tests typical small business scale"),
        (1975, 5000, "Test large enterprise chain",
         "National chain, tests large-scale business operations"),
        (1965, 20000, "Test global mega-brand",
         "International corporation, tests maximum scale operations"),
    ]
    return [
        SeedCase(
            case_number=i,
            brand_name=_company(rng),
            year_founded=y,
            headquarters=rng.choice(CITIES),
            number_of_locations=n,
            test_purpose=purpose,
            notes=notes,
        )
        for i, (y, n, purpose, notes) in enumerate(plan, start=1)
    ]


def write_seed_cases_xlsx(cases: list[SeedCase], path: Path) -> Path:
    """Document the seed cases as a one-sheet workbook."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)

    df = pd.DataFrame([vars(c) for c in cases], columns=list(COLUMNS))
    df = df.rename(columns={k: title for k, (title, _) in COLUMNS.items()})

    with pd.ExcelWriter(path, engine="openpyxl") as writer:
        df.to_excel(writer, sheet_name=SHEET_NAME, index=False)
        sheet = writer.sheets[SHEET_NAME]
        for idx, (_, width) in enumerate(COLUMNS.values()):
            sheet.column_dimensions[chr(ord("A") + idx)].width = width

    log.info("seed case documentation written: %s (%s rows)", path, len(df))
    return path
