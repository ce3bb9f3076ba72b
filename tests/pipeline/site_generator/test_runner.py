"""Tests for the batch runner: per-row isolation and fatal input handling."""

import shutil
from datetime import date
from pathlib import Path

import pytest

from storefront.config import TEMPLATES_DIR
from storefront.exceptions import DataValidationError, UserInputError
from storefront.pipeline.site_generator import runner
from storefront.pipeline.site_generator.runner import run_batch, run_from_config

CSV_TEXT = (
    "domain,primary_keyword,brand_name,product_name,blog1_title\n"
    "alpha.shop,alpha gadget,Alpha,Alpha One,Alpha Tips\n"
    "beta.shop,beta gadget,Beta,,\n"
)


def _write_csv(tmp_path: Path, text: str = CSV_TEXT) -> Path:
    csv_path = tmp_path / "sites.csv"
    csv_path.write_text(text, encoding="utf-8")
    return csv_path


def test_run_batch_isolates_row_failures(tmp_path: Path, run_date):
    rows = [
        {"domain": "alpha.shop", "primary_keyword": "alpha"},
        {"domain": "", "primary_keyword": "orphan"},
        {"domain": "beta.shop", "primary_keyword": "beta"},
    ]
    report = run_batch(rows, TEMPLATES_DIR, tmp_path, run_date)
    assert [r.ok for r in report.results] == [True, False, True]
    assert report.results[1].domain == "unknown"
    assert "domain" in report.results[1].error
    assert (tmp_path / "alpha-shop" / "index.html").is_file()
    assert (tmp_path / "beta-shop" / "index.html").is_file()


def test_run_batch_records_unexpected_errors(monkeypatch, tmp_path: Path, run_date):
    calls = []

    def fake_generate_site(row, templates, output_dir, when):
        calls.append(row["domain"])
        if row["domain"] == "alpha.shop":
            raise PermissionError("read-only output")
        return runner.SiteResult(domain=row["domain"], domain_slug="beta-shop", pages=3)

    monkeypatch.setattr(runner, "generate_site", fake_generate_site)
    report = run_batch(
        [{"domain": "alpha.shop"}, {"domain": "beta.shop"}], TEMPLATES_DIR, tmp_path, run_date
    )
    assert calls == ["alpha.shop", "beta.shop"]
    assert [r.domain for r in report.failed] == ["alpha.shop"]
    assert "read-only" in report.failed[0].error
    assert [r.domain for r in report.succeeded] == ["beta.shop"]


def test_run_batch_missing_templates_fails_every_row(tmp_path: Path, run_date):
    report = run_batch(
        [{"domain": "alpha.shop"}, {"domain": "beta.shop"}],
        tmp_path / "no-templates",
        tmp_path / "out",
        run_date,
    )
    assert len(report.failed) == 2
    assert all("templates" in r.error for r in report.failed)


def test_run_batch_undecodable_template_fails_every_row(tmp_path: Path, run_date):
    templates_dir = tmp_path / "templates"
    shutil.copytree(TEMPLATES_DIR, templates_dir)
    (templates_dir / "blog.html").write_bytes(b"\xff\xfe bad {{HEADER}}")
    report = run_batch(
        [{"domain": "alpha.shop"}, {"domain": "beta.shop"}],
        templates_dir,
        tmp_path / "out",
        run_date,
    )
    assert [r.domain for r in report.failed] == ["alpha.shop", "beta.shop"]
    assert all("templates" in r.error for r in report.failed)
    assert not (tmp_path / "out" / "alpha-shop").exists()


def test_run_batch_rejects_slug_collisions(tmp_path: Path, run_date):
    rows = [{"domain": "alpha.shop"}, {"domain": "alpha-shop"}]
    report = run_batch(rows, TEMPLATES_DIR, tmp_path, run_date)
    assert report.results[0].ok
    assert not report.results[1].ok
    assert "alpha.shop" in report.results[1].error


def test_run_batch_defaults_to_today(tmp_path: Path):
    report = run_batch([], TEMPLATES_DIR, tmp_path)
    assert report.run_date == date.today()
    assert report.results == []


def test_run_from_config_filters_to_one_site(tmp_path: Path, run_date):
    out = tmp_path / "out"
    report = run_from_config(
        csv_path=_write_csv(tmp_path), domain="beta.shop", output_dir=out, run_date=run_date
    )
    assert [r.domain for r in report.succeeded] == ["beta.shop"]
    assert sorted(p.name for p in out.iterdir()) == ["beta-shop"]


def test_run_from_config_unmatched_domain_writes_nothing(tmp_path: Path):
    out = tmp_path / "out"
    with pytest.raises(UserInputError):
        run_from_config(csv_path=_write_csv(tmp_path), domain="gamma.shop", output_dir=out)
    assert not out.exists()


def test_run_from_config_missing_csv(tmp_path: Path):
    with pytest.raises(UserInputError):
        run_from_config(csv_path=tmp_path / "nope.csv", output_dir=tmp_path / "out")


def test_run_from_config_header_only_csv(tmp_path: Path):
    with pytest.raises(DataValidationError):
        run_from_config(
            csv_path=_write_csv(tmp_path, "domain,brand_name\n"), output_dir=tmp_path / "out"
        )
    assert not (tmp_path / "out").exists()
