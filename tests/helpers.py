"""PDF inspection helpers built on PyPDF2."""

from PyPDF2 import PdfReader

A4_LANDSCAPE_PT = (297 * 72 / 25.4, 210 * 72 / 25.4)


def read_pdf(path_or_stream) -> PdfReader:
    return PdfReader(path_or_stream)


def image_streams(reader: PdfReader):
    """Decoded data of every image XObject on the first page."""
    xobjects = reader.pages[0]["/Resources"]["/XObject"]
    streams = []
    for name in xobjects:
        obj = xobjects[name].get_object()
        if obj["/Subtype"] == "/Image":
            streams.append(obj.get_data())
    return streams


def link_annotations(reader: PdfReader):
    """(uri, rect) for every URI link annotation on the first page."""
    links = []
    page = reader.pages[0]
    for ref in (page["/Annots"] if "/Annots" in page else []):
        annot = ref.get_object()
        action = annot["/A"] if "/A" in annot else None
        if annot["/Subtype"] == "/Link" and action is not None:
            action = action.get_object()
            links.append((str(action["/URI"]), [float(v) for v in annot["/Rect"]]))
    return links
