from .activity import ActivityModel, IdealMixture, UNIFACActivityModel, create_activity_model, ACTIVITY_CLASSES
