"""
Document Normalizer Module.

Turns the raw extraction result into the document returned to callers:
separator fields are dropped and extraction bookkeeping (length, count,
checksum flags) is stripped.
"""

from identity_validator.utils.logger import get_logger
from identity_validator.template_model.template import FieldKind
from identity_validator.extraction.document import PublicDocument, PublicField, RawDocument

# Initialize module logger
logger = get_logger(__name__)


class DocumentNormalizer:
    """
    Produces a PublicDocument from a RawDocument.

    Example:
        >>> normalizer = DocumentNormalizer()
        >>> public = normalizer.normalize(raw_document)
        >>> "filler" in public.names
        False
    """

    def normalize(self, document: RawDocument) -> PublicDocument:
        """
        Strip separators and internal attributes.

        Args:
            document: Raw document produced by the field extractor.

        Returns:
            PublicDocument in template order.
        """
        public = PublicDocument(notation=document.notation)

        for raw_field in document:
            if raw_field.kind is FieldKind.SEPARATOR:
                continue

            public.fields.append(PublicField(
                kind=raw_field.kind,
                name=raw_field.name,
                value=raw_field.value,
                checksum_for=raw_field.checksum_for,
            ))

        dropped = len(document) - len(public)
        if dropped:
            logger.debug(f"Dropped {dropped} separator field(s)")

        return public
