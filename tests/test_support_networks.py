from renal_aid.data.support_networks import (
    SUPPORT_NETWORKS,
    NetworkType,
    SupportFilter,
    filter_support_networks,
    get_national_organisations,
    search_support_networks,
    split_by_scope,
)


def ids(networks):
    return [n.id for n in networks]


def test_directory_contents():
    assert len(SUPPORT_NETWORKS) == 23
    assert len(set(ids(SUPPORT_NETWORKS))) == 23
    assert all(n.website.startswith("https://") for n in SUPPORT_NETWORKS)
    assert ids(get_national_organisations()) == [
        "kidney-care-uk",
        "national-kidney-federation",
        "kidney-research-uk",
        "carers-uk",
        "carers-trust",
        "kidney-patient-involvement-network",
    ]


def test_empty_search_gives_national_organisations():
    assert search_support_networks("   ") == get_national_organisations()


def test_search_matches_regions_case_insensitively():
    found = ids(search_support_networks("Leeds"))
    assert found == ["kidney-research-yorkshire", "leeds-teaching-hospitals"]
    assert search_support_networks("atlantis") == []


def test_search_puts_national_organisations_first():
    found = search_support_networks("helpline bradford")
    assert found[0].is_national
    assert ids(found)[-1] == "bradford-teaching-hospitals"
    assert "pkd-charity" in ids(found)


def test_filters():
    patients = filter_support_networks(SUPPORT_NETWORKS, "patient")
    assert "carers-uk" not in ids(patients)
    assert "kidney-care-uk" in ids(patients)

    carers = filter_support_networks(SUPPORT_NETWORKS, SupportFilter.CARER)
    assert len(carers) == len(SUPPORT_NETWORKS)

    nhs = filter_support_networks(SUPPORT_NETWORKS, "nhs")
    assert len(nhs) == 11
    assert all(n.type == NetworkType.NHS_TRUST for n in nhs)

    assert filter_support_networks(SUPPORT_NETWORKS, "national") == get_national_organisations()
    assert filter_support_networks(SUPPORT_NETWORKS) == SUPPORT_NETWORKS


def test_split_by_scope():
    wide, local = split_by_scope(search_support_networks("syndrome cardiff"))
    assert ids(wide) == ["nest-trust"]
    assert ids(local) == ["kidney-wales"]
