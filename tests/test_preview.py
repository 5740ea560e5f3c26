from studyguide.render import MarkdownPreviewRenderer


def test_preview_renders_markdown_and_math() -> None:
    guide = (
        "## Chapter 1: Energy\n\n"
        "**Q: What is kinetic energy?**\n\n"
        "A: It is $E_k = \\frac{1}{2} m v^2$.\n\n"
        "$$\nF = m a\n$$\n"
    )

    artifact = MarkdownPreviewRenderer().render("Guide", "course.pdf", guide)
    html = artifact.text()

    assert artifact.media_type == "text/html"
    assert artifact.file_name is None
    assert "<h2>Chapter 1: Energy</h2>" in html
    assert "<strong>Q: What is kinetic energy?</strong>" in html
    assert 'class="math inline"' in html
    assert 'class="math block"' in html
    assert "Source File: course.pdf" in html


def test_preview_escapes_raw_html() -> None:
    html = MarkdownPreviewRenderer().render("<Guide>", "a&b.pdf", "<script>alert(1)</script>").text()

    assert "<script>" not in html
    assert "&lt;Guide&gt;" in html
    assert "a&amp;b.pdf" in html
