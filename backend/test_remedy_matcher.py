# backend/test_remedy_matcher.py

import pytest
from backend.remedy_matcher import (
    RemedyMatch,
    exact_tier,
    find_remedies,
    fuzzy_tier,
    match_with_tier,
    substring_tier,
)
from backend.remedy_table import DEFAULT_REMEDIES, RemedyTable, default_table


@pytest.fixture
def table():
    return default_table()


def symptoms_of(results):
    return [m.symptom for m in results]


@pytest.mark.parametrize('key', list(DEFAULT_REMEDIES))
@pytest.mark.parametrize('dress', [str, str.upper, str.title, lambda s: f'  {s}\t', lambda s: f'\n{s.upper()} '])
def test_exact_key_returns_that_entry_only(table, key, dress):
    results = find_remedies(dress(key), table)
    assert results == [RemedyMatch(key, table[key])]
    assert list(results[0].remedies) == DEFAULT_REMEDIES[key]


@pytest.mark.parametrize('query', ['', ' ', '   ', '\t\n', '　'])
def test_blank_query_returns_nothing(table, query):
    assert find_remedies(query, table) == []
    assert match_with_tier(query, table) == ('none', [])


@pytest.mark.parametrize('query', [None, 42, ['headache']])
def test_non_string_query_is_treated_as_empty(table, query):
    assert find_remedies(query, table) == []


@pytest.mark.parametrize('query, expected_tier, expected', [
    ('head', 'substring', ['headache']),
    ('ache', 'substring', ['headache']),
    ('e', 'substring', ['headache', 'fever', 'indigestion', 'stress']),
    ('cold cough', 'fuzzy', ['cough']),
    ('stress headache', 'fuzzy', ['headache', 'stress']),
    ('bad cough and fever', 'fuzzy', ['fever', 'cough']),
    ('xyz123', 'none', []),
    ('headaches', 'none', []),
])
def test_tier_selection(table, query, expected_tier, expected):
    tier, results = match_with_tier(query, table)
    assert tier == expected_tier
    assert symptoms_of(results) == expected


def test_exact_wins_over_substring():
    t = RemedyTable({'whooping cough': ['a'], 'cough': ['b']})
    assert match_with_tier('cough', t) == ('exact', [RemedyMatch('cough', ('b',))])


def test_substring_skips_fuzzy():
    t = RemedyTable({'back pain': ['a'], 'pain': ['b'], 'back': ['c']})
    tier, results = match_with_tier('ack pai', t)
    assert tier == 'substring'
    assert symptoms_of(results) == ['back pain']


def test_fuzzy_orders_by_score_then_table_order():
    t = RemedyTable({'neck': ['n'], 'pain': ['p'], 'neck pain': ['np'], 'cramp': ['c']})
    scored = fuzzy_tier('neck pain now', t)
    assert [(m.symptom, s) for m, s in scored] == [('neck pain', 2), ('neck', 1), ('pain', 1)]
    assert symptoms_of(find_remedies('neck pain now', t)) == ['neck pain', 'neck', 'pain']


def test_fuzzy_counts_distinct_tokens():
    t = RemedyTable({'back pain': ['bp'], 'backache': ['ba']})
    # backache would score 3 if "ache" counted twice; it ties with back pain at 2
    scored = fuzzy_tier('ache ache back pain', t)
    assert [(m.symptom, s) for m, s in scored] == [('back pain', 2), ('backache', 2)]


def test_fuzzy_score_is_not_normalized():
    t = RemedyTable({'ear': ['e'], 'earache with fever': ['f']})
    assert symptoms_of(find_remedies('ear fever', t)) == ['earache with fever', 'ear']


def test_tiers_are_independent(table):
    assert symptoms_of(exact_tier('fever', table)) == ['fever']
    assert exact_tier('fev', table) == []
    assert symptoms_of(substring_tier('fev', table)) == ['fever']
    assert substring_tier('cold cough', table) == []
    assert fuzzy_tier('', table) == []


def test_remedies_are_the_stored_sequence(table):
    for key in table:
        (match,) = find_remedies(key, table)
        assert match.remedies is table[key]


def test_results_never_leave_the_table(table):
    for query in ['a', 'in', 'ress fever', 'cough cough', 'zz']:
        for m in find_remedies(query, table):
            assert m.symptom in table


def test_table_is_not_mutated(table):
    before = {k: tuple(v) for k, v in table.items()}
    for query in ['headache', 'head', 'cold cough', 'nothing here']:
        find_remedies(query, table)
    assert {k: tuple(v) for k, v in table.items()} == before


def test_empty_table():
    assert find_remedies('headache', RemedyTable({})) == []


def test_to_dict():
    m = RemedyMatch('fever', ('a', 'b'))
    assert m.to_dict() == {'symptom': 'fever', 'remedies': ['a', 'b']}
