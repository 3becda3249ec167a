import pdfplumber


def parse_pdf_text(path: str) -> str:
    text_parts = []
    with pdfplumber.open(path) as pdf:
        for page in pdf.pages:
            t = page.extract_text() or ""
            if t.strip():
                text_parts.append(t.strip())
    return "\n\n".join(text_parts)


def looks_like_pdf(content: bytes) -> bool:
    return content[:5] == b"%PDF-"
