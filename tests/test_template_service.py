"""Tests for template variable rendering."""

from datetime import date

from bizdesk.core.config import settings
from bizdesk.schemas.submission import ProjectContext
from bizdesk.services import template_service


TODAY = date(2026, 1, 5)


def _render(template, submission, project=None):
    return template_service.render_template_variables(template, submission, project, today=TODAY)


def test_render_substitutes_known_and_keeps_unknown(make_submission):
    submission = make_submission(clientName="Acme")

    rendered = _render("Hi {{client_name}}, total due {{amount}}", submission)

    assert rendered == "Hi Acme, total due {{amount}}"


def test_render_returns_empty_string_for_missing_template(make_submission):
    submission = make_submission(clientName="Acme")

    assert _render("", submission) == ""
    assert _render(None, submission) == ""


def test_render_leaves_plain_text_unchanged(make_submission):
    template = "Thanks for reaching out. We'll be in touch {soon}."

    assert _render(template, make_submission()) == template


def test_builtin_defaults(make_submission):
    rendered = _render(
        "{{client_name}}|{{client_email}}|{{client_phone}}|{{client_company}}|"
        "{{project_name}}|{{form_name}}",
        make_submission(),
    )

    assert rendered == "Client||||New Project|"


def test_empty_client_name_falls_back_to_default(make_submission):
    assert _render("{{client_name}}", make_submission(clientName="")) == "Client"


def test_project_context_supplies_project_name(make_submission):
    project = ProjectContext(name="Website Redesign")

    assert _render("{{project_name}}", make_submission(), project) == "Website Redesign"


def test_submission_date_uses_configured_format(make_submission, monkeypatch):
    assert _render("{{submission_date}}", make_submission()) == "01/05/2026"

    monkeypatch.setattr(settings, "SUBMISSION_DATE_FORMAT", "%Y-%m-%d")
    assert _render("{{submission_date}}", make_submission()) == "2026-01-05"


def test_form_values_are_keyed_by_safe_label(make_submission):
    submission = make_submission(
        formValues={
            "f1": {"label": "Budget (USD)", "value": 42},
            "f2": {"label": "Start Date", "value": "next week"},
        }
    )

    rendered = _render("{{budget__usd_}} / {{start_date}}", submission)

    assert rendered == "42 / next week"


def test_numbers_and_booleans_render_as_display_text(make_submission):
    submission = make_submission(
        formValues={
            "a": {"label": "Whole", "value": 42.0},
            "b": {"label": "Fraction", "value": 12.5},
            "c": {"label": "Rush", "value": True},
        }
    )

    assert _render("{{whole}} {{fraction}} {{rush}}", submission) == "42 12.5 true"


def test_date_values_use_display_format(make_submission):
    submission = make_submission(formValues={"d": {"label": "Due", "value": date(2026, 3, 9)}})

    assert _render("Due {{due}}", submission) == "Due 03/09/2026"


def test_falsy_defined_values_are_substituted(make_submission):
    submission = make_submission(
        formValues={
            "a": {"label": "Discount", "value": 0},
            "b": {"label": "Notes", "value": ""},
            "c": {"label": "Approved", "value": False},
        }
    )

    assert _render("[{{discount}}][{{notes}}][{{approved}}]", submission) == "[0][][false]"


def test_entry_without_value_is_missing(make_submission):
    submission = make_submission(
        formValues={
            "a": {"label": "Amount"},
            "b": {"value": "no label"},
            "c": None,
        }
    )

    assert _render("{{amount}}", submission) == "{{amount}}"
    assert "amount" not in template_service.build_variable_map(submission, today=TODAY)


def test_explicit_null_value_renders_empty(make_submission):
    submission = make_submission(formValues={"a": {"label": "Amount", "value": None}})

    assert _render("[{{amount}}]", submission) == "[]"


def test_placeholder_lookup_is_case_insensitive(make_submission):
    submission = make_submission(clientName="Acme")

    assert _render("{{CLIENT_NAME}} / {{Client_Name}}", submission) == "Acme / Acme"


def test_whitespace_inside_braces_is_not_a_placeholder(make_submission):
    submission = make_submission(clientName="Acme")

    assert _render("{{ client_name }}", submission) == "{{ client_name }}"


def test_colliding_labels_last_one_wins(make_submission):
    submission = make_submission(
        formValues={
            "first": {"label": "Due Date", "value": "Monday"},
            "second": {"label": "due-date", "value": "Friday"},
        }
    )

    assert _render("{{due_date}}", submission) == "Friday"


def test_form_value_overrides_builtin(make_submission):
    submission = make_submission(
        clientName="Acme",
        formValues={"name": {"label": "Client Name", "value": "Acme Corp"}},
    )

    assert _render("{{client_name}}", submission) == "Acme Corp"


def test_substituted_values_are_not_rescanned(make_submission):
    submission = make_submission(
        clientName="Acme",
        formValues={"a": {"label": "Message", "value": "{{client_name}}"}},
    )

    assert _render("Note: {{message}}", submission) == "Note: {{client_name}}"


def test_rendering_twice_is_stable(make_submission):
    submission = make_submission(
        clientName="Acme",
        formValues={"a": {"label": "Amount", "value": 150}},
    )
    template = "Hi {{client_name}}, you owe {{amount}} by {{deadline}}"

    once = _render(template, submission)
    twice = _render(once, submission)

    assert once == "Hi Acme, you owe 150 by {{deadline}}"
    assert twice == once


def test_safe_variable_key():
    assert template_service.safe_variable_key("Due Date!") == "due_date_"
    assert template_service.safe_variable_key("Café") == "caf_"
    assert template_service.safe_variable_key("phone2") == "phone2"


def test_extract_and_find_unresolved_variables(make_submission):
    template = "{{Client_Name}} {{amount}} {{amount}} {{ spaced }}"
    variables = template_service.build_variable_map(make_submission(), today=TODAY)

    assert template_service.extract_template_variables(template) == {"client_name", "amount"}
    assert template_service.find_unresolved_variables(template, variables) == ["amount"]
    assert template_service.extract_template_variables(None) == set()


def test_list_answer_renders_comma_joined(make_submission):
    submission = make_submission(
        formValues={
            "s": {"label": "Services", "value": ["SEO", "Ads"]},
            "m": {"label": "Mixed", "value": [1, 2.0, True, None, "x"]},
        }
    )

    assert submission.form_values["s"].value == ["SEO", "Ads"]
    assert _render("{{services}} / {{mixed}}", submission) == "SEO,Ads / 1,2,true,,x"


def test_mapping_answer_renders_as_json(make_submission):
    submission = make_submission(
        formValues={"a": {"label": "Address", "value": {"city": "Austin", "zip": 78701}}}
    )

    assert _render("{{address}}", submission) == '{"city":"Austin","zip":78701}'


def test_non_ascii_letters_do_not_match_placeholders(make_submission):
    submission = make_submission(formValues={"k": {"label": "Key", "value": "v"}})
    # U+212A KELVIN SIGN lowercases to "k"
    template = "{{\u212aey}} {{key}}"

    assert _render(template, submission) == "{{\u212aey}} v"
    assert template_service.extract_template_variables(template) == {"key"}
