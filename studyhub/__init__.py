"""StudyHub: a shared study-resource catalog with social features."""
