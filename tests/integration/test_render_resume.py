"""
Integration tests for render_resume - YAML file in, PDF on disk out.
"""

from datetime import date
from io import BytesIO

import pytest
from omegaconf import OmegaConf
from PyPDF2 import PdfReader

from vellum.contexts.rendering import assembler as assembler_module
from vellum.contexts.rendering.assembler import PDFAssembler, render_resume
from vellum.contexts.rendering.backend import ReportLabBackend
from vellum.contexts.rendering.fonts import GlyphAvailabilityResolver
from vellum.contexts.templating.exceptions import InvalidResumeDataError
from vellum.contexts.templating.template_registry import TemplateRegistry
from vellum.utils.pdf_processing import extract_lines, extract_text, page_count


@pytest.fixture
def logs_path(tmp_path, monkeypatch):
    logs = tmp_path / "logs"
    monkeypatch.setattr(assembler_module, "LOGS_PATH", logs)
    return logs


@pytest.fixture
def helvetica_assembler():
    return PDFAssembler(registry=TemplateRegistry(), resolver=GlyphAvailabilityResolver(candidates=[]))


def write_resume(path, resume: dict):
    OmegaConf.save(OmegaConf.create({"resume": resume}), path)
    return path


def experience(index: int) -> dict:
    return {
        "company": f"Company {index}",
        "position": "Engineer",
        "start_date": "2015-01",
        "end_date": "2016-01",
        "description": "Built and operated services for a growing customer base.",
        "achievements": ["Shipped the thing", "Kept it running"],
    }


@pytest.mark.integration
def test_render_resume_writes_pdf(tmp_path, logs_path, helvetica_assembler):
    resume_file = write_resume(
        tmp_path / "jane.yaml",
        {
            "personal_info": {"name": "Jane Doe", "email": "jane@example.com"},
            "experiences": [
                {"company": "Acme", "position": "Engineer", "start_date": "2021-01", "is_current": True}
            ],
        },
    )
    output_dir = tmp_path / "out"

    result = render_resume(
        resume_file, language_mode="english", output_dir=output_dir, assembler=helvetica_assembler
    )

    assert result.success
    assert result.errors == []
    assert result.pdf_path == output_dir / f"Jane Doe_{date.today().isoformat()}.pdf"
    assert result.pdf_path.read_bytes().startswith(b"%PDF")
    assert result.num_bytes == result.pdf_path.stat().st_size
    assert result.page_count == 1
    assert result.page_breaks == 0

    assert result.log_dir.parent == logs_path
    assert (result.log_dir / "render.log").exists()
    assert (result.log_dir / result.pdf_path.name).is_symlink()


@pytest.mark.integration
def test_render_resume_unknown_template(tmp_path, logs_path, helvetica_assembler):
    resume_file = write_resume(
        tmp_path / "jane.yaml", {"personal_info": {"name": "Jane", "email": "j@example.com"}}
    )
    output_dir = tmp_path / "out"

    result = render_resume(
        resume_file, template_name="baroque", output_dir=output_dir, assembler=helvetica_assembler
    )

    assert not result.success
    assert result.pdf_path is None
    assert "baroque" in result.errors[0]
    assert not output_dir.exists()


@pytest.mark.integration
def test_render_resume_invalid_data(tmp_path, logs_path, helvetica_assembler):
    resume_file = write_resume(tmp_path / "broken.yaml", {"personal_info": {"name": "Jane"}})

    with pytest.raises(InvalidResumeDataError):
        render_resume(resume_file, output_dir=tmp_path / "out", assembler=helvetica_assembler)


@pytest.mark.integration
def test_long_resume_spans_pages(tmp_path, logs_path, helvetica_assembler):
    resume_file = write_resume(
        tmp_path / "long.yaml",
        {
            "personal_info": {"name": "Jane Doe", "email": "jane@example.com"},
            "experiences": [experience(i) for i in range(30)],
        },
    )

    result = render_resume(
        resume_file, language_mode="english", output_dir=tmp_path / "out", assembler=helvetica_assembler
    )

    assert result.success
    assert result.page_count > 1
    assert result.page_breaks == result.page_count - 1

    pdf_bytes = result.pdf_path.read_bytes()
    pages = extract_text(pdf_bytes)
    assert "Work Experience" in pages[0]
    assert all("Work Experience" not in page for page in pages[1:])
    assert "Company 29" in pages[-1]


@pytest.mark.integration
def test_document_metadata(helvetica_assembler, acme_document):
    pdf_bytes = helvetica_assembler.render(acme_document)
    metadata = PdfReader(BytesIO(pdf_bytes)).metadata

    assert metadata.title == "Jane Doe - Resume"
    assert metadata.author == "Jane Doe"
    assert metadata.subject == "Professional Resume"


@pytest.mark.integration
def test_source_script_with_capable_font(full_document):
    """Uses whatever CJK font the machine has; skipped without one."""
    resolver = GlyphAvailabilityResolver()
    if not resolver.resolve(ReportLabBackend()).capable:
        pytest.skip("No font with CJK glyph coverage installed")

    pdf_bytes = PDFAssembler(registry=TemplateRegistry(), resolver=resolver).render(full_document)

    text = "\n".join(extract_lines(pdf_bytes))
    assert page_count(pdf_bytes) == 1
    assert "工作经历" in text
    assert "至今" in text


@pytest.mark.integration
def test_auto_mode_without_capable_font_transliterates(helvetica_assembler, full_document):
    pdf_bytes = helvetica_assembler.render(full_document)

    text = "\n".join(extract_lines(pdf_bytes))
    assert "Work Experience" in text
    assert "Present" in text
    assert "Alibaba" in text

