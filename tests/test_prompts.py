from screening.prompts import SAMPLE_SCREENINGS, build_prompt


def test_build_prompt_embeds_inputs_verbatim():
    prompt = build_prompt("Senior Engineer", "Acme & Co.", "Build {things}\nwith care")
    assert "Senior Engineer" in prompt
    assert "Acme & Co." in prompt
    assert "Build {things}\nwith care" in prompt


def test_build_prompt_is_stable():
    assert build_prompt("Engineer", "Acme", "Build things") == build_prompt("Engineer", "Acme", "Build things")


def test_build_prompt_differs_per_job():
    assert build_prompt("Engineer", "Acme", "x") != build_prompt("Designer", "Acme", "x")


def test_sample_screenings_are_non_empty():
    assert set(SAMPLE_SCREENINGS) == {"abc123", "xyz789"}
    assert all(p.strip() for p in SAMPLE_SCREENINGS.values())
