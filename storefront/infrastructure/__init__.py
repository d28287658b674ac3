"""Infrastructure: Firestore and Firebase Auth REST clients, local persistence, media upload."""
