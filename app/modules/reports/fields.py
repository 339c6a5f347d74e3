"""Canonical output columns a report may select."""

FIELDS_LIST = frozenset(
    {
        "user_id",
        "user_userid",
        "user_firstname",
        "user_lastname",
        "user_fullname",
        "user_email",
        "user_email_validation_status",
        "user_level",
        "user_deactivated",
        "user_expiration",
        "user_suspend_date",
        "user_register_date",
        "user_last_access_date",
        "user_branch_name",
        "user_branches",
        "user_branches_codes",
        "user_branch_path",
        "user_auth_app_paired",
        "user_manager_permissions",
        "user_timezone",
        "user_language",
        "user_direct_manager",
        "course_id",
        "course_code",
        "course_name",
        "course_category_code",
        "course_category",
        "course_status",
        "course_credits",
        "course_duration",
        "course_type",
        "course_date_begin",
        "course_date_end",
        "course_expired",
        "course_creation_date",
        "course_e_signature",
        "course_e_signature_hash",
        "course_language",
        "course_unique_id",
        "course_skills",
        "webinar_session_name",
        "webinar_session_score_base",
        "webinar_session_start_date",
        "webinar_session_end_date",
        "webinar_session_session_time",
        "webinar_session_webinar_tool",
        "webinar_session_tool_time_in_session",
        "webinar_session_user_level",
        "webinar_session_user_enroll_date",
        "webinar_session_user_status",
        "webinar_session_user_learn_eval",
        "webinar_session_user_eval_status",
        "webinar_session_user_instructor_feedback",
        "webinar_session_user_enrollment_status",
        "webinar_session_user_subscribe_date",
        "webinar_session_user_complete_date",
        "courseuser_level",
        "courseuser_date_inscr",
        "courseuser_date_first_access",
        "courseuser_date_last_access",
        "courseuser_date_complete",
        "courseuser_expiration_date",
        "courseuser_status",
        "courseuser_date_begin_validity",
        "courseuser_date_expire_validity",
        "courseuser_score_given",
        "courseuser_initial_score_given",
        "courseuser_days_left",
        "courseuser_enrollment_codeset",
        "courseuser_enrollment_code",
        "courseuser_assignment_type",
        "enrollment_archived",
        "enrollment_archiving_date",
        "group_group_or_branch_name",
        "group_members_count",
        "lp_name",
        "lp_code",
        "lp_credits",
        "lp_uuid",
        "lp_last_edit",
        "lp_creation_date",
        "lp_description",
        "lp_associated_courses",
        "lp_mandatory_associated_courses",
        "lp_status",
        "lp_language",
        "lp_enrollment_date",
        "lp_enrollment_completion_date",
        "lp_enrollment_status",
        "lp_enrollment_start_of_validity",
        "lp_enrollment_end_of_validity",
        "lp_enrollment_assignment_type",
        "lp_enrollment_completion_percentage",
        "lp_stat_progress_percentage_mandatory",
        "lp_stat_progress_percentage_optional",
        "lp_stat_duration",
        "lp_stat_duration_mandatory",
        "lp_stat_duration_optional",
        "lp_course_language",
        "course_enrollment_date_inscr",
        "course_enrollment_date_complete",
        "course_enrollment_date_begin_validity",
        "course_enrollment_date_expire_validity",
        "course_enrollment_status",
        "lo_title",
        "lo_bookmark",
        "lo_date_attempt",
        "lo_first_attempt",
        "lo_score",
        "lo_status",
        "lo_type",
        "lo_version",
        "lo_date_complete",
        "stats_user_course_completion_percentage",
        "stats_total_time_in_course",
        "stats_total_sessions_in_course",
        "stats_number_of_actions",
        "stats_enrolled_users",
        "stats_users_enrolled_in_course",
        "stats_not_started_users",
        "stats_not_started_users_percentage",
        "stats_in_progress_users",
        "stats_in_progress_users_percentage",
        "stats_completed_users",
        "stats_completed_users_percentage",
        "stats_course_rating",
        "stats_active",
        "stats_expired",
        "stats_issued",
        "stats_archived",
        "stats_session_time",
        "stats_user_flow",
        "stats_user_flow_percentage",
        "stats_user_flow_yes_no",
        "stats_user_course_flow_percentage",
        "stats_user_course_time_spent_by_flow",
        "stats_user_flow_ms_teams_yes_no",
        "stats_user_course_flow_ms_teams_percentage",
        "stats_user_course_time_spent_by_flow_ms_teams",
        "stats_user_flow_ms_teams",
        "stats_user_flow_ms_teams_percentage",
        "stats_course_access_from_mobile",
        "stats_percentage_of_course_from_mobile",
        "stats_time_spent_from_mobile",
        "stats_access_from_mobile",
        "stats_percentage_access_from_mobile",
        "stats_path_enrolled_users",
        "stats_path_not_started_users",
        "stats_path_not_started_users_percentage",
        "stats_path_in_progress_users",
        "stats_path_in_progress_users_percentage",
        "stats_path_completed_users",
        "stats_path_completed_users_percentage",
        "session_unique_id",
        "session_internal_id",
        "session_name",
        "session_code",
        "session_evaluation_score_base",
        "session_start_date",
        "session_end_date",
        "session_time_session",
        "session_instructor_userids",
        "session_instructor_fullnames",
        "session_attendance_type",
        "session_maximum_enrollments",
        "session_event_name",
        "session_event_id",
        "session_event_date",
        "session_event_start_date",
        "session_event_duration",
        "session_event_timezone",
        "session_event_type",
        "session_event_instructor_user_name",
        "session_event_instructor_fullname",
        "session_instructor_list",
        "session_minimum_enrollments",
        "session_completion_rate",
        "session_hours",
        "session_user_enrolled",
        "session_user_completed",
        "session_user_waiting",
        "session_user_in_progress",
        "session_completion_mode",
        "session_evaluation_status_not_set",
        "session_evaluation_status_not_passed",
        "session_evaluation_status_passed",
        "session_enrolled_users",
        "session_session_time",
        "session_training_material_time",
        "event_instructor_list",
        "event_attendance_status_not_set_perc",
        "event_attendance_status_absent_perc",
        "event_attendance_status_prsent_perc",
        "event_average_score",
        "enrollment_attendance",
        "enrollment_date",
        "enrollment_enrollment_status",
        "enrollment_evaluation_status",
        "enrollment_instructor_feedback",
        "enrollment_learner_evaluation",
        "enrollment_user_course_level",
        "enrollment_user_session_status",
        "enrollment_user_session_subscribe_date",
        "enrollment_user_session_complete_date",
        "enrollment_user_session_event_attendance_hours",
        "enrollment_user_session_event_attendance_status",
        "certification_title",
        "certification_code",
        "certification_description",
        "certification_duration",
        "certification_completed_activity",
        "certification_issued_on",
        "certification_to_renew_in",
        "certification_status",
        "badge_description",
        "badge_name",
        "badge_score",
        "badge_issued_on",
        "external_training_course_name",
        "external_training_course_type",
        "external_training_score",
        "external_training_date",
        "external_training_date_start",
        "external_training_credits",
        "external_training_training_institute",
        "external_training_certificate",
        "external_training_status",
        "ecommerce_transaction_address_1",
        "ecommerce_transaction_address_2",
        "ecommerce_transaction_city",
        "ecommerce_transaction_company_name",
        "ecommerce_transaction_coupon_code",
        "ecommerce_transaction_coupon_description",
        "ecommerce_transaction_discount",
        "ecommerce_transaction_external_transaction_id",
        "ecommerce_transaction_payment_date",
        "ecommerce_transaction_payment_method",
        "ecommerce_transaction_payment_status",
        "ecommerce_transaction_price",
        "ecommerce_transaction_quantity",
        "ecommerce_transaction_state",
        "ecommerce_transaction_subtotal_price",
        "ecommerce_transaction_total_price",
        "ecommerce_transaction_transaction_creation_date",
        "ecommerce_transaction_transaction_id",
        "ecommerce_transaction_vat_number",
        "ecommerce_transaction_zip_code",
        "ecommerce_transaction_item_course_lp_code",
        "ecommerce_transaction_item_course_lp_name",
        "ecommerce_transaction_item_start_date",
        "ecommerce_transaction_item_end_date",
        "ecommerce_transaction_item_ilt_webinar_session_name",
        "ecommerce_transaction_item_ilt_location",
        "ecommerce_transaction_item_type",
        "content_partners_affiliate",
        "content_partners_referral_link_code",
        "content_partners_referral_link_source",
        "asset_name",
        "channels",
        "published_by",
        "published_on",
        "last_edit_by",
        "asset_type",
        "asset_average_review",
        "asset_description",
        "asset_tag",
        "asset_skill",
        "asset_last_access",
        "asset_first_access",
        "asset_number_access",
        "answer_dislikes",
        "answer_likes",
        "answers",
        "asset_rating",
        "average_reaction_time",
        "best_answers",
        "global_watch_rate",
        "invited_people",
        "not_watched",
        "questions",
        "total_views",
        "watched",
        "involved_channels",
        "published_assets",
        "unpublished_assets",
        "private_assets",
        "uploaded_assets",
        "survey_completion_date",
        "survey_completion_id",
        "answer_user",
        "question_id",
        "question",
        "question_type",
        "question_mandatory",
        "survey_description",
        "survey_id",
        "survey_title",
        "survey_tracking_type",
    }
)
