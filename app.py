"""
AutoEDA - Main Application
Upload a CSV and get column statistics, data quality, histograms and a
baseline model for a chosen target column.
"""

import json
import logging

import streamlit as st

from config.analysis_configs import (
    AnalysisConfig, BASELINE_DESCRIPTIONS, BIN_PERCENT_OPTIONS, DEFAULT_BIN_PERCENT,
    LOG_LEVEL, MAX_BASELINE_ROWS, MAX_UPLOAD_BYTES
)
from autoeda.baseline import (
    ClassificationBaseline, InsufficientData, NoTarget, NoUsableFeatures,
    RegressionBaseline, evaluate_baseline
)
from autoeda.charts import (
    plot_class_distribution, plot_confusion_matrix, plot_correlation_heatmap,
    plot_histogram, plot_missing_values
)
from autoeda.correlation import correlate, high_correlation_pairs
from autoeda.csv_table import decode_csv_bytes, parse
from autoeda.histogram import format_bin_percent, histogram, parse_bin_percent
from autoeda.profiler import (
    ColumnKind, count_kinds, dataset_overview, missing_values, numeric_column_names, profile
)
from autoeda.report import generate_markdown_report, generate_report, report_to_dict
from autoeda.stats import describe, summaries_to_dataframe
from autoeda.utils import format_bytes, format_percentage, truncate_string

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(name)s %(levelname)s %(message)s")
logger = logging.getLogger("autoeda.app")

# Page configuration - must be first Streamlit command
st.set_page_config(
    page_title="AutoEDA",
    page_icon="A",
    layout="wide",
    initial_sidebar_state="expanded"
)


def init_session_state():
    """Initialize session state variables."""
    defaults = {
        'table': None,
        'file_name': None,
        'file_size': None,
        'config': AnalysisConfig()
    }

    for key, value in defaults.items():
        if key not in st.session_state:
            st.session_state[key] = value


def render_upload_page():
    """Render the upload page."""
    st.header("Upload Dataset")

    st.markdown(f"""
    Upload a CSV file to analyze.
    - **Maximum file size:** {format_bytes(MAX_UPLOAD_BYTES)}
    """)

    uploaded_file = st.file_uploader("Choose a file", type=["csv"])

    if uploaded_file is not None:
        if uploaded_file.size > MAX_UPLOAD_BYTES:
            st.error(f"File size ({format_bytes(uploaded_file.size)}) exceeds maximum allowed")
            return

        try:
            with st.spinner("Loading dataset..."):
                text, encoding = decode_csv_bytes(uploaded_file.getvalue())
                table = parse(text)
        except Exception as e:
            logger.exception("Failed to load %s", uploaded_file.name)
            st.error(f"Error reading file: {str(e)}")
            return

        if table.is_empty:
            st.error("The file contains no header line.")
            return

        st.session_state['table'] = table
        st.session_state['file_name'] = uploaded_file.name
        st.session_state['file_size'] = uploaded_file.size
        st.session_state['config'] = AnalysisConfig()
        logger.info("Loaded %s (%s): %r", uploaded_file.name, encoding, table)
        st.caption(f"Detected encoding: {encoding}")
        st.success("Dataset loaded successfully!")

    table = st.session_state.get('table')
    if table is None:
        return

    overview = dataset_overview(table, profile(table), st.session_state.get('file_size'))

    st.markdown("---")
    st.info(f"Current dataset: **{truncate_string(st.session_state['file_name'])}**")

    col1, col2, col3, col4, col5 = st.columns(5)
    col1.metric("Rows", f"{overview.n_rows:,}")
    col2.metric("Columns", overview.n_columns)
    col3.metric("Numeric", overview.numeric_count)
    col4.metric("Categorical", overview.categorical_count)
    col5.metric("File Size", format_bytes(overview.file_size))

    st.subheader("Data Preview")
    st.dataframe(table.to_dataframe().head(10), use_container_width=True)


def render_column_stats_page(table, config):
    """Column kinds, numeric summaries and target selection."""
    st.header("Column Statistics")

    profiles = profile(table)
    counts = count_kinds(profiles)

    col1, col2, col3 = st.columns(3)
    col1.metric("Numeric", counts[ColumnKind.NUMERIC])
    col2.metric("Categorical", counts[ColumnKind.CATEGORICAL])
    col3.metric("Text", counts[ColumnKind.TEXT])

    st.subheader("General Statistics")
    summaries = describe(table, profiles)
    if summaries:
        stats_df = summaries_to_dataframe(summaries, profiles)
        st.dataframe(stats_df.round(3), use_container_width=True, hide_index=True)
    else:
        st.info("No numeric columns found in the dataset.")

    st.subheader("Target Column")
    options = [""] + list(table.header)
    current = options.index(config.target_column) if config.target_column in options else 0
    selected = st.selectbox("Select the target column:", options, index=current)

    if st.button("Set Target"):
        if not selected:
            st.warning("Please select a target column.")
        else:
            config.target_column = selected
            kind = next(p.kind for p in profiles if p.name == selected)
            label = "Numeric" if kind is ColumnKind.NUMERIC else "Categorical"
            st.success(f"Target column: {selected} ({label})")


def render_data_quality_page(table):
    """Missing values and correlation heatmap."""
    st.header("Data Quality")

    profiles = profile(table)

    st.subheader("Missing Values")
    entries = missing_values(profiles)
    st.plotly_chart(plot_missing_values(entries), use_container_width=True)

    st.subheader("Correlation")
    names = numeric_column_names(profiles)
    if len(names) < 2:
        st.info("Need at least 2 numeric columns for correlation analysis.")
        return

    matrix = correlate(table, names)
    st.plotly_chart(plot_correlation_heatmap(matrix), use_container_width=True)

    pairs = high_correlation_pairs(matrix)
    if pairs:
        st.warning(f"Found {len(pairs)} highly correlated pairs")
        st.dataframe(
            [{'Feature 1': p.first, 'Feature 2': p.second, 'Correlation': round(p.correlation, 4)}
             for p in pairs],
            use_container_width=True, hide_index=True
        )


def render_histogram_page(table, config):
    """Histogram for one column."""
    st.header("Histogram")

    options = list(table.header)
    current = options.index(config.histogram_column) if config.histogram_column in options else 0
    column = st.selectbox("Column:", options, index=current)
    config.histogram_column = column

    bin_labels = [format_bin_percent(p) for p in BIN_PERCENT_OPTIONS]
    current_label = format_bin_percent(config.bin_percent)
    choice = st.selectbox(
        "Bin size (numeric columns):",
        bin_labels,
        index=bin_labels.index(current_label) if current_label in bin_labels
        else bin_labels.index(format_bin_percent(DEFAULT_BIN_PERCENT))
    )
    bin_percent = parse_bin_percent(choice, DEFAULT_BIN_PERCENT)
    config.bin_percent = bin_percent

    result = histogram(table, column, bin_percent)
    if not result.bins:
        st.info(f"No values in {column}.")
        return

    st.plotly_chart(plot_histogram(result), use_container_width=True)

    first_header = 'Range' if result.is_numeric else 'Value'
    st.dataframe(
        [{first_header: b.label, 'Count': b.count, 'Ratio': format_percentage(b.ratio, 0)}
         for b in result.bins],
        use_container_width=True, hide_index=True
    )


def render_target_analysis_page(table, config):
    """Baseline model for the selected target."""
    st.header("Target Analysis")

    if table.n_rows > MAX_BASELINE_ROWS:
        st.warning(f"The baseline is limited to {MAX_BASELINE_ROWS:,} rows; this dataset has {table.n_rows:,}.")
        return

    with st.spinner("Running baseline..."):
        result = evaluate_baseline(table, config.target_column, config.k_neighbors)

    if isinstance(result, NoTarget):
        st.info(BASELINE_DESCRIPTIONS['no_target'])

    elif isinstance(result, RegressionBaseline):
        st.markdown(f"**{result.target}** (numeric): {BASELINE_DESCRIPTIONS['regression']}")
        col1, col2, col3, col4 = st.columns(4)
        col1.metric("RMSE", f"{result.rmse:.3f}")
        col2.metric("MAE", f"{result.mae:.3f}")
        col3.metric("Rows used", result.rows_used)
        col4.metric("Target mean", f"{result.target_mean:.3f}")
        st.caption(f"Current R² = {result.r2:.3f} (mean predictor baseline).")

    elif isinstance(result, ClassificationBaseline):
        st.markdown(f"**{result.target}** (categorical): {BASELINE_DESCRIPTIONS['classification']}")
        col1, col2, col3, col4 = st.columns(4)
        col1.metric("Accuracy", format_percentage(result.accuracy))
        col2.metric("Macro F1", f"{result.macro_f1:.3f}")
        col3.metric("Rows used", result.rows_used)
        col4.metric("Features", result.feature_count)

        tab1, tab2 = st.tabs(["Class Distribution", "Confusion Matrix"])
        with tab1:
            st.plotly_chart(plot_class_distribution(result), use_container_width=True)
        with tab2:
            st.plotly_chart(
                plot_confusion_matrix(result, f'Confusion Matrix - {result.target}'),
                use_container_width=True
            )

    elif isinstance(result, NoUsableFeatures):
        st.warning(BASELINE_DESCRIPTIONS['no_usable_features'])

    elif isinstance(result, InsufficientData):
        st.warning(BASELINE_DESCRIPTIONS['insufficient_data'])

    else:
        raise TypeError(f"Unknown baseline result: {type(result).__name__}")


def render_report_page(table, config):
    """Full report download."""
    st.header("Generate Report")

    if table.n_rows > MAX_BASELINE_ROWS and config.target_column:
        st.warning(f"The baseline is limited to {MAX_BASELINE_ROWS:,} rows; the report skips it.")
        config = AnalysisConfig(
            histogram_column=config.histogram_column,
            bin_percent=config.bin_percent,
            k_neighbors=config.k_neighbors
        )

    report = generate_report(table, config, st.session_state.get('file_size'))
    markdown = generate_markdown_report(report, st.session_state.get('file_name'))

    col1, col2 = st.columns(2)
    with col1:
        st.download_button(
            label="Download Markdown",
            data=markdown,
            file_name="autoeda_report.md",
            mime="text/markdown"
        )
    with col2:
        st.download_button(
            label="Download JSON",
            data=json.dumps(report_to_dict(report), indent=2),
            file_name="autoeda_report.json",
            mime="application/json"
        )

    st.markdown(markdown)


def render_sidebar():
    """Render the sidebar navigation."""
    st.sidebar.markdown("## AutoEDA")

    pages = [
        ("Upload Dataset", "upload"),
        ("Column Statistics", "columns"),
        ("Data Quality", "quality"),
        ("Histogram", "histogram"),
        ("Target Analysis", "target"),
        ("Generate Report", "report")
    ]

    selected_page = st.sidebar.radio(
        "Select Page",
        [page[0] for page in pages],
        label_visibility="collapsed"
    )

    page_key = next((p[1] for p in pages if p[0] == selected_page), "upload")

    if st.sidebar.button("Reset All", use_container_width=True):
        for key in list(st.session_state.keys()):
            del st.session_state[key]
        st.rerun()

    table = st.session_state.get('table')
    if table is not None:
        st.sidebar.markdown("### Dataset Info")
        st.sidebar.markdown(f"""
- Rows: **{table.n_rows:,}**
- Columns: **{table.n_columns}**
- Target: **{st.session_state['config'].target_column or 'Not set'}**
""")

    return page_key


def main():
    """Main application entry point."""
    init_session_state()

    page_key = render_sidebar()

    if page_key == "upload":
        render_upload_page()
        return

    table = st.session_state.get('table')
    if table is None:
        st.warning("Please upload a dataset first!")
        return

    config = st.session_state['config']

    if page_key == "columns":
        render_column_stats_page(table, config)
    elif page_key == "quality":
        render_data_quality_page(table)
    elif page_key == "histogram":
        render_histogram_page(table, config)
    elif page_key == "target":
        render_target_analysis_page(table, config)
    elif page_key == "report":
        render_report_page(table, config)


if __name__ == "__main__":
    main()
