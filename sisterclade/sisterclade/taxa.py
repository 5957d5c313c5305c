"""Fixed taxon partition and the two rooting hypotheses tested on it."""

from __future__ import annotations

from typing import Dict, FrozenSet

Taxon = str
TaxonSet = FrozenSet[Taxon]

# Choanoflagellates, filastereans, ichthyosporeans, Placozoa, Cnidaria, Bilateria.
OUTGROUP_AND_OTHER_ANIMALS: TaxonSet = frozenset(
    {
        "Monosiga_brevicollis",
        "Monosiga_ovata",
        "Salpingoeca_rosetta",
        "Acanthoeca_sp",
        "Capsaspora_owczarzaki",
        "Sphaeroforma_arctica",
        "Amoebidium_parasiticum",
        "Trichoplax_adhaerens",
        "Nematostella_vectensis",
        "Hydra_vulgaris",
        "Acropora_digitifera",
        "Aurelia_aurita",
        "Homo_sapiens",
        "Branchiostoma_floridae",
        "Strongylocentrotus_purpuratus",
        "Drosophila_melanogaster",
        "Daphnia_pulex",
        "Capitella_teleta",
        "Lottia_gigantea",
        "Schmidtea_mediterranea",
    }
)

PORIFERA: TaxonSet = frozenset(
    {
        "Amphimedon_queenslandica",
        "Ephydatia_muelleri",
        "Petrosia_ficiformis",
        "Aphrocallistes_vastus",
        "Oscarella_carmela",
        "Corticium_candelabrum",
        "Sycon_ciliatum",
        "Leucosolenia_complicata",
    }
)

CTENOPHORA: TaxonSet = frozenset(
    {
        "Mnemiopsis_leidyi",
        "Pleurobrachia_bachei",
        "Beroe_abyssicola",
        "Bolinopsis_infundibulum",
        "Hormiphora_californensis",
        "Euplokamis_dunlapae",
        "Vallicula_multiformis",
        "Coeloplana_astericola",
        "Dryodora_glandiformis",
    }
)

FUNGI: TaxonSet = frozenset(
    {
        "Saccharomyces_cerevisiae",
        "Schizosaccharomyces_pombe",
        "Spizellomyces_punctatus",
        "Allomyces_macrogynus",
        "Rhizopus_oryzae",
    }
)

ALL_TAXA: TaxonSet = OUTGROUP_AND_OTHER_ANIMALS | PORIFERA | CTENOPHORA | FUNGI

CTENOPHORA_SISTER: TaxonSet = OUTGROUP_AND_OTHER_ANIMALS | PORIFERA
PORIFERA_SISTER: TaxonSet = OUTGROUP_AND_OTHER_ANIMALS | CTENOPHORA

# Key order fixes the order of the `<key>_support` fields.
HYPOTHESES: Dict[str, TaxonSet] = {
    "ctenosis": CTENOPHORA_SISTER,
    "porifera": PORIFERA_SISTER,
}

HYPOTHESIS_NAMES: Dict[str, str] = {
    "ctenosis": "Ctenophora-sister",
    "porifera": "Porifera-sister",
}


def _check_partition() -> None:
    groups = (OUTGROUP_AND_OTHER_ANIMALS, PORIFERA, CTENOPHORA, FUNGI)
    if sum(len(g) for g in groups) != len(ALL_TAXA):
        raise RuntimeError("Taxon groups overlap")
    if CTENOPHORA_SISTER == PORIFERA_SISTER:
        raise RuntimeError("Hypothesis clades must differ")


_check_partition()
