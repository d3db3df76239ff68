"""
Plotly figures for analysis results.
"""

import pandas as pd
import plotly.express as px


def plot_histogram(result):
    """Bar chart of histogram bins, in bin order."""
    df = pd.DataFrame({
        'Bin': [b.label for b in result.bins],
        'Count': [b.count for b in result.bins],
        'Ratio': [b.ratio * 100 for b in result.bins]
    })
    x_title = 'Range' if result.is_numeric else 'Value'

    fig = px.bar(
        df, x='Bin', y='Count', text='Ratio',
        title=f'Distribution of {result.column}'
    )
    fig.update_traces(texttemplate='%{text:.0f}%', textposition='outside')
    fig.update_layout(xaxis_title=x_title, xaxis={'type': 'category'})

    return fig


def plot_correlation_heatmap(matrix):
    """Correlation heatmap with values printed in each cell."""
    fig = px.imshow(
        matrix.to_frame(),
        labels=dict(color="Correlation"),
        x=list(matrix.columns),
        y=list(matrix.columns),
        color_continuous_scale='RdBu_r',
        aspect='auto',
        zmin=-1,
        zmax=1,
        text_auto='.2f'
    )
    fig.update_layout(title='Correlation Matrix')

    return fig


def plot_confusion_matrix(baseline, title='Confusion Matrix'):
    """Create confusion matrix heatmap."""
    class_names = list(baseline.classes)

    fig = px.imshow(
        [list(row) for row in baseline.confusion_matrix],
        labels=dict(x="Predicted", y="Actual", color="Count"),
        x=class_names,
        y=class_names,
        color_continuous_scale='Blues',
        title=title,
        text_auto=True
    )

    return fig


def plot_missing_values(entries):
    """Horizontal bars of missing percentage per column."""
    df = pd.DataFrame({
        'Column': [e.name for e in entries],
        'Missing %': [e.missing_ratio * 100 for e in entries]
    })

    fig = px.bar(
        df, x='Missing %', y='Column', orientation='h',
        color='Missing %', color_continuous_scale='Reds',
        title='Missing Values by Column'
    )
    fig.update_layout(yaxis={'categoryorder': 'total ascending'}, xaxis_range=[0, 100])

    return fig


def plot_class_distribution(baseline):
    """Bar chart of class counts among the rows the baseline used."""
    df = pd.DataFrame({
        'Class': [s.label for s in baseline.class_distribution],
        'Count': [s.count for s in baseline.class_distribution],
        'Percentage': [s.ratio * 100 for s in baseline.class_distribution]
    })

    fig = px.bar(
        df, x='Class', y='Count', color='Class', text='Percentage',
        title='Class Distribution'
    )
    fig.update_traces(texttemplate='%{text:.1f}%', textposition='outside')
    fig.update_layout(showlegend=False)

    return fig
