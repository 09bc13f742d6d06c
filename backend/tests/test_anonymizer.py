from services.anonymizer import build_anonymized_name, redact_candidate


class TestBuildAnonymizedName:
    def test_full_name(self):
        assert build_anonymized_name("Sara Al Qahtani", "cand-123456789") == "Sara Q."

    def test_two_words(self):
        assert build_anonymized_name("John Doe", "x") == "John D."

    def test_single_word(self):
        assert build_anonymized_name("Cher", "x") == "C***"

    def test_extra_whitespace(self):
        assert build_anonymized_name("  John   Doe  ", "x") == "John D."

    def test_blank_name(self):
        assert build_anonymized_name("   ", "x") == "C***"

    def test_missing_name_uses_id_prefix(self):
        assert build_anonymized_name(None, "abcdef123456") == "Candidate abcdef"
        assert build_anonymized_name("", "abc") == "Candidate abc"


class TestRedactCandidate:
    def test_locked_candidate_is_masked(self, make_candidate):
        candidate = make_candidate(display_name="John Doe")
        view = redact_candidate(candidate, unlocked=False)
        assert view.display_name == "John D."
        assert view.current_company == "Acme"
        assert candidate.display_name == "John Doe"

    def test_unlocked_candidate_keeps_name(self, make_candidate):
        view = redact_candidate(make_candidate(display_name="John Doe"), unlocked=True)
        assert view.display_name == "John Doe"

    def test_privacy_flags_apply_even_when_unlocked(self, make_candidate):
        candidate = make_candidate(
            hide_current_employer=True,
            hide_salary_history=True,
            desired_salary_min=10000,
            desired_salary_max=15000,
        )
        for unlocked in (False, True):
            view = redact_candidate(candidate, unlocked=unlocked)
            assert view.current_company is None
            assert view.desired_salary_min is None
            assert view.desired_salary_max is None

    def test_salary_visible_without_flag(self, make_candidate):
        view = redact_candidate(
            make_candidate(desired_salary_min=10000, desired_salary_max=15000), unlocked=False
        )
        assert view.desired_salary_min == 10000
        assert view.desired_salary_max == 15000
