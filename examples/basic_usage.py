"""Basic usage example for the Jotion document service."""

from jotion.identity import IdentityProvider
from jotion.logging_config import configure_logging
from jotion.services import DocumentPatch, DocumentService
from jotion.storage import Database


def main():
    """Demonstrate nesting, publishing, archiving and restoring documents."""
    configure_logging()

    # Initialize database (uses SQLite by default)
    db = Database()
    db.create_tables()

    # Resolve the caller the way the HTTP API does, from a bearer token
    provider = IdentityProvider.from_settings()
    token = provider.issue_token("user_demo", name="Demo User")
    me = provider.get_user_identity(token)

    with db.session() as session:
        service = DocumentService(session)

        guide = service.create_document(me, "Getting Started Guide")
        print(f"Created document: {guide.title} (ID: {guide.id})")

        install = service.create_document(me, "Installation", parent_document=guide.id)
        service.create_document(me, "Troubleshooting", parent_document=install.id)

        service.update_document(
            me,
            guide.id,
            DocumentPatch(content="Welcome!", icon="📘", is_published=True),
        )
        public = service.get_document_by_id(None, guide.id)
        print(f"Anyone can read: {public.title} ({public.icon})")

        print("Sidebar:")
        for doc in service.get_sidebar(me):
            print(f"  {doc.title}")
            for child in service.get_sidebar(me, doc.id):
                print(f"    {child.title}")

        service.archive_document(me, guide.id)
        print(f"Trash: {[d.title for d in service.get_trashed_documents(me)]}")

        # Restoring a child whose parent is still archived moves it to root level
        restored = service.restore_document(me, install.id)
        print(f"Restored {restored.title}, parent now {restored.parent_document}")

        print(f"All live documents: {[d.title for d in service.search_documents(me)]}")


if __name__ == "__main__":
    main()
